import asyncio
import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from flapmyport.database import Base, get_db
from flapmyport.main import app
from flapmyport.models.port_flap import PortFlap
from flapmyport.schemas.flap import FlapRecord

BASE_TIME = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    counter = {"id": 0}

    def _make(minutes=0, status="up", ipaddress="10.0.0.1", if_index=1, **overrides):
        counter["id"] += 1
        fields = {
            "id": counter["id"],
            "time": BASE_TIME + timedelta(minutes=minutes),
            "ipaddress": ipaddress,
            "hostname": "sw-core-1",
            "if_index": if_index,
            "if_name": f"Gi0/{if_index}",
            "if_alias": None,
            "if_oper_status": status,
        }
        fields.update(overrides)
        return FlapRecord(**fields)

    return _make


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'flaps.db'}"

    async def _create():
        engine = create_async_engine(url, poolclass=NullPool)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_create())
    return url


@pytest.fixture
def seed_flaps(db_url):
    """Insert `ports` rows; each dict gets minutes offset from BASE_TIME."""
    def _seed(rows):
        async def _insert():
            engine = create_async_engine(db_url, poolclass=NullPool)
            async with async_sessionmaker(engine)() as session:
                for row in rows:
                    row = dict(row)
                    row["time"] = BASE_TIME + timedelta(minutes=row.pop("minutes"))
                    row.setdefault("sid", "test")
                    row.setdefault("timeticks", 0)
                    session.add(PortFlap(**row))
                await session.commit()
            await engine.dispose()

        asyncio.run(_insert())

    return _seed


@pytest.fixture
def client(db_url):
    engine = create_async_engine(db_url, poolclass=NullPool)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()
