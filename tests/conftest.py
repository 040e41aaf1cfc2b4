import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE IN-MEMORY SESSIONS
# Must happen BEFORE importing app.main so settings never see a Redis URL
# from the developer's environment.
# ------------------------------------------------------------------
os.environ["REDIS_URL"] = ""
os.environ["ENV"] = "dev"

from app.main import app
from app.core.session_store import InMemorySessionStore
from app.services.admission_flow import AdmissionFlow
from app.services.form_storage import FormStorage


VALID_DETAILS = {
    "fullName": "Ananya",
    "middleName": "Kumari",
    "lastName": "Sen",
    "gender": "female",
    "dob": "2006-04-12",
    "pob": "Darjeeling",
    "address": "12 Hill Cart Road, Siliguri",
    "phone": "98765 43210",
    "email": "ananya.sen@example.com",
    "fatherName": "Rakesh Sen",
    "motherName": "Mita Sen",
    "chooseBCA": "yes",
}


@pytest.fixture
def valid_details():
    return dict(VALID_DETAILS)


@pytest.fixture
def memory_store():
    return InMemorySessionStore("test-session", {})


@pytest.fixture
def form_storage(memory_store):
    return FormStorage(memory_store)


@pytest.fixture
def flow(form_storage):
    return AdmissionFlow(form_storage)


@pytest_asyncio.fixture
async def client():
    """
    Each client starts without cookies, so it gets its own session.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
