"""Projects API client"""

import json

import httpx
import pytest

from portfolio_admin.core.api_client import ApiError, AuthenticationError
from portfolio_admin.core.projects_client import ProjectsClient
from portfolio_admin.schemas.project import ProjectCreate, ProjectUpdate

PROJECT_ID = "507f1f77bcf86cd799439011"

PROJECT_DOC = {
    "_id": PROJECT_ID,
    "title": "Portfolio",
    "description": "Personal site",
    "technologies": ["React"],
    "timeline": {"start": "2024-01", "end": None},
    "imageUrl": "https://example.com/cover.png",
    "media": [
        {"_id": "65a000000000000000000001", "type": "image", "url": "https://example.com/1.png",
         "publicId": "portfolio/projects/x/1", "order": 0, "displayFirst": True},
    ],
    "tags": ["web"],
}


def new_project() -> ProjectCreate:
    return ProjectCreate(
        title="Portfolio",
        description="Personal site",
        technologies=["React"],
        timeline={"start": "2024-01"},
        tags=["web"],
    )


async def test_list_projects_normalizes_ids(mock_client):
    legacy = dict(PROJECT_DOC)
    legacy["id"] = legacy.pop("_id")

    def handler(request):
        assert request.url.path == "/api/projects"
        assert request.headers["Cache-Control"].startswith("no-cache")
        return httpx.Response(200, json=[PROJECT_DOC, legacy])

    client = ProjectsClient(client=mock_client(handler))

    projects = await client.list_projects()

    assert [p.id for p in projects] == [PROJECT_ID, PROJECT_ID]
    assert projects[0].media[0].id == "65a000000000000000000001"
    assert projects[0].cover_media.url == "https://example.com/1.png"


async def test_list_featured_projects(mock_client):
    seen = []

    def handler(request):
        seen.append(request.url.path)
        return httpx.Response(200, json=[])

    client = ProjectsClient(client=mock_client(handler))

    assert await client.list_projects(featured=True) == []
    assert seen == ["/api/projects/featured"]


async def test_list_projects_rejects_non_list(mock_client):
    client = ProjectsClient(client=mock_client(lambda r: httpx.Response(200, json={"oops": True})))

    with pytest.raises(ApiError) as exc:
        await client.list_projects()

    assert exc.value.message == "Failed to fetch projects"


async def test_get_project_not_found_uses_server_msg(mock_client):
    client = ProjectsClient(client=mock_client(lambda r: httpx.Response(404, json={"msg": "Project not found"})))

    with pytest.raises(ApiError) as exc:
        await client.get_project(PROJECT_ID)

    assert exc.value.message == "Project not found"


async def test_server_error_without_body_uses_status_message(mock_client):
    client = ProjectsClient(client=mock_client(lambda r: httpx.Response(500, text="Server Error")))

    with pytest.raises(ApiError) as exc:
        await client.get_project(PROJECT_ID)

    assert exc.value.message == "Server error occurred. Please try again later."


@pytest.mark.parametrize("bad_id", ["", "   ", "undefined", "not-an-object-id", None])
async def test_invalid_project_id_makes_no_request(mock_client, token, bad_id):
    calls = []
    client = ProjectsClient(client=mock_client(lambda r: calls.append(r) or httpx.Response(200, json={})))

    with pytest.raises(ApiError):
        await client.delete_project(bad_id, token)

    assert calls == []


async def test_create_project_sends_wire_payload(mock_client, token):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=PROJECT_DOC)

    client = ProjectsClient(client=mock_client(handler))

    project = await client.create_project(new_project(), token)

    assert seen["method"] == "POST"
    assert seen["auth"] == f"Bearer {token}"
    assert seen["body"]["timeline"] == {"start": "2024-01", "end": None}
    assert seen["body"]["media"] == []
    assert "imageUrl" not in seen["body"]
    assert project.id == PROJECT_ID


async def test_update_project_strips_id(mock_client, token):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(200, json=PROJECT_DOC)

    client = ProjectsClient(client=mock_client(handler))

    await client.update_project(f"  {PROJECT_ID} ", new_project(), token)

    assert seen == {"method": "PUT", "path": f"/api/projects/{PROJECT_ID}"}


async def test_partial_update_sends_only_set_fields(mock_client, token):
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=PROJECT_DOC)

    client = ProjectsClient(client=mock_client(handler))

    await client.update_project(PROJECT_ID, ProjectUpdate(title="Renamed", demo_link=None), token)
    await client.update_project(PROJECT_ID, ProjectUpdate(timeline={"start": "2023-05"}), token)

    assert bodies == [
        {"title": "Renamed", "demoLink": None},
        {"timeline": {"start": "2023-05", "end": None}},
    ]


async def test_validation_errors_are_joined(mock_client, token):
    body = {"errors": [{"msg": "Title is required"}, {"msg": "Description is required"}]}
    client = ProjectsClient(client=mock_client(lambda r: httpx.Response(400, json=body)))

    with pytest.raises(ApiError) as exc:
        await client.create_project(new_project(), token)

    assert exc.value.message == "Title is required; Description is required"


async def test_delete_project_returns_message(mock_client, token):
    client = ProjectsClient(client=mock_client(lambda r: httpx.Response(200, json={"msg": "Project removed"})))

    assert await client.delete_project(PROJECT_ID, token) == "Project removed"


async def test_write_without_token_is_refused(mock_client):
    client = ProjectsClient(client=mock_client(lambda r: httpx.Response(200, json=PROJECT_DOC)))

    with pytest.raises(AuthenticationError):
        await client.create_project(new_project(), None)


async def test_check_health(mock_client):
    up = ProjectsClient(client=mock_client(lambda r: httpx.Response(200, json={"status": "ok"})))
    down = ProjectsClient(client=mock_client(lambda r: httpx.Response(503)))

    assert await up.check_health() is True
    assert await down.check_health() is False


async def test_owned_client_is_closed():
    async with ProjectsClient(base_url="http://api.test/api") as client:
        assert client._owns_client
    assert client._client.is_closed
