from flapmyport.models.port_flap import PortFlap

__all__ = [
    "PortFlap",
]
