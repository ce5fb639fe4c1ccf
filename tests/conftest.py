import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.main import create_app
from app.models.property import PropertyIn
from app.services.property_repository import PropertyRepository
from app.services.property_service import PropertyService, get_property_service

SAMPLE_PROPERTIES = [
    {"id_owner": "OW001", "name": "Luxury Villa", "address": "12 Ocean Drive, Miami", "price": 300000, "image_url": "https://img.example.com/1.jpg"},
    {"id_owner": "OW001", "name": "Beach House", "address": "4 Shore Road, Miami", "price": 450000, "image_url": "https://img.example.com/2.jpg"},
    {"id_owner": "OW002", "name": "City Loft", "address": "88 Main Street, New York", "price": 650000, "image_url": "https://img.example.com/3.jpg"},
    {"id_owner": "OW002", "name": "Country Cottage", "address": "7 Mill Lane, Austin", "price": 120000, "image_url": "https://img.example.com/4.jpg"},
    {"id_owner": "OW003", "name": "Downtown Studio", "address": "200 Main Street, Chicago", "price": 95000, "image_url": "https://img.example.com/5.jpg"},
    {"id_owner": "OW003", "name": "Garden Apartment", "address": "15 Park Avenue, Boston", "price": 275000, "image_url": "https://img.example.com/6.jpg"},
    {"id_owner": "OW004", "name": "Hilltop Mansion", "address": "1 Summit Way, Denver", "price": 1200000, "image_url": "https://img.example.com/7.jpg"},
    {"id_owner": "OW004", "name": "Lake Cabin", "address": "3 Lakeshore Drive, Madison", "price": 180000, "image_url": "https://img.example.com/8.jpg"},
    {"id_owner": "OW005", "name": "Modern Townhouse", "address": "56 Elm Street, Seattle", "price": 520000, "image_url": "https://img.example.com/9.jpg"},
    {"id_owner": "OW005", "name": "Rustic Farmhouse", "address": "900 County Road, Nashville", "price": 340000, "image_url": "https://img.example.com/10.jpg"},
    {"id_owner": "OW006", "name": "luxury penthouse", "address": "77 Skyline Blvd, Miami", "price": 980000, "image_url": "https://img.example.com/11.jpg"},
]


@pytest.fixture
def collection():
    client = AsyncMongoMockClient()
    return client[f"test_{uuid.uuid4().hex}"]["properties"]


@pytest.fixture
def repository(collection):
    return PropertyRepository(collection)


@pytest.fixture
def service(repository):
    return PropertyService(repository, max_page_size=100)


@pytest_asyncio.fixture
async def seeded(service):
    """Insert the sample catalog and return the created properties."""
    created = []
    for data in SAMPLE_PROPERTIES:
        result = await service.create_property(PropertyIn(**data))
        created.append(result.value)
    return created


@pytest.fixture
def app(service):
    application = create_app()
    application.dependency_overrides[get_property_service] = lambda: service
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
