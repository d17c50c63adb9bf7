"""Interface flap rows as written by the snmpflapd collector."""
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Index
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import column_property
from sqlalchemy.sql.expression import FunctionElement
from flapmyport.database import Base


class utc_time(FunctionElement):
    """A server-local DATETIME expression converted to UTC.

    MySQL: CONVERT_TZ(expr, @@session.time_zone, '+00:00'). Other dialects
    store UTC already and get the bare expression.
    """
    type = DateTime()
    name = "utc_time"
    inherit_cache = True


@compiles(utc_time)
def _compile_utc_time(element, compiler, **kw):
    return compiler.process(element.clauses, **kw)


@compiles(utc_time, "mysql")
def _compile_utc_time_mysql(element, compiler, **kw):
    # numeric offset: named zones need the server's tz tables loaded
    expr = compiler.process(element.clauses, **kw)
    return "CONVERT_TZ(%s, @@session.time_zone, '+00:00')" % expr


class PortFlap(Base):
    """One ifOperStatus transition received as an SNMP linkUp/linkDown trap.

    The collector owns this table; the API only reads it. Column names follow
    the collector's schema, attribute names follow ours. `time` is in the
    database server's zone; read and filter on `time_utc`.
    """
    __tablename__ = "ports"

    id = Column(Integer, primary_key=True, index=True)
    sid = Column(String(100))                      # collector session id
    time = Column(DateTime(timezone=True), nullable=False)
    timeticks = Column(BigInteger, default=0)      # sysUpTime from the trap
    ipaddress = Column(String(50), nullable=False)
    hostname = Column(String(255))
    if_index = Column("ifIndex", Integer, nullable=False)
    if_name = Column("ifName", String(255))
    if_alias = Column("ifAlias", String(255))
    if_oper_status = Column("ifOperStatus", String(20), nullable=False)  # up, down

    time_utc = column_property(utc_time(time))

    __table_args__ = (
        Index("ix_ports_time", "time"),
        Index("ix_ports_host_if_time", "ipaddress", "ifIndex", "time"),
    )
