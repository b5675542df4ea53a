import pytest
from sqlalchemy.exc import OperationalError
from notekeeper.api import deps
from notekeeper.api.main import app

@pytest.mark.asyncio
@pytest.mark.integration
async def test_liveness(client):
	resp = await client.get('/health/liveness')
	assert resp.status_code == 200
	assert resp.json()['status'] == 'ok'

@pytest.mark.asyncio
@pytest.mark.integration
async def test_readiness(client):
	resp = await client.get('/health/readiness')
	assert resp.status_code == 200
	assert resp.json()['status'] == 'ready'

@pytest.mark.asyncio
@pytest.mark.integration
async def test_root(client):
	resp = await client.get('/')
	assert resp.status_code == 200
	data = resp.json()
	assert data['status'] == 'ok'
	assert data['service'] == 'notekeeper'

class _BrokenSession:
	async def execute(self, *args, **kwargs):
		raise OperationalError("SELECT", {}, Exception("connection refused"))

@pytest.mark.asyncio
@pytest.mark.integration
async def test_readiness_degraded(client):
	async def _broken_db():
		yield _BrokenSession()
	app.dependency_overrides[deps.get_db] = _broken_db
	try:
		resp = await client.get('/health/readiness')
	finally:
		app.dependency_overrides.pop(deps.get_db, None)
	assert resp.status_code == 503
	assert resp.json()['status'] == 'degraded'
