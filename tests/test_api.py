"""
Tests for hostctl.utils.api module.
"""

import httpx
import pytest

from hostctl.errors import RemoteFetchError, RemoteMutationError
from hostctl.utils.api import HostctlApiClient
from hostctl.workflows.models import WorkflowHandle


def make_api(hostctl_config, handler) -> HostctlApiClient:
    """Build an API client whose requests are answered by `handler`."""
    http_client = httpx.AsyncClient(
        base_url=f"{hostctl_config.api_url}/",
        transport=httpx.MockTransport(handler),
    )
    return HostctlApiClient(config=hostctl_config, http_client=http_client)


class TestHostctlApiClient:
    """Tests for HostctlApiClient class."""

    @pytest.mark.asyncio
    async def test_create_client_sets_headers(self, hostctl_config):
        """Test the session token is sent as bearer credential."""
        api = await HostctlApiClient.create(hostctl_config)
        try:
            assert api._http.headers["Authorization"] == f"Bearer {hostctl_config.session_token}"
            assert str(api._http.base_url) == f"{hostctl_config.api_url}/"
        finally:
            await api.close()

    @pytest.mark.asyncio
    async def test_listing_sends_page_params(self, hostctl_config):
        """Test paged listings send limit and start."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"id": "a"}, {"id": "b"}])

        api = make_api(hostctl_config, handler)
        records, has_more = await api.listing("users/u/memberships/sites", start="x")

        assert [r["id"] for r in records] == ["a", "b"]
        assert has_more is False
        assert seen[0].url.path == "/api/users/u/memberships/sites"
        assert seen[0].url.params["limit"] == "100"
        assert seen[0].url.params["start"] == "x"

    @pytest.mark.asyncio
    async def test_listing_full_page_has_more(self, hostctl_config):
        """Test a full page reports more results."""
        config = hostctl_config.model_copy(update={"page_size": 2})

        def handler(request):
            return httpx.Response(200, json={"data": [{"id": "a"}, {"id": "b"}]})

        api = make_api(config, handler)
        records, has_more = await api.listing("organizations/o/memberships/users")

        assert len(records) == 2
        assert has_more is True

    @pytest.mark.asyncio
    async def test_listing_unpaged(self, hostctl_config):
        """Test unpaged listings send no paging params and never have more."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"a": {"id": "a"}, "b": {"id": "b"}})

        api = make_api(hostctl_config, handler)
        records, has_more = await api.listing("users/u/memberships/sites", paged=False)

        assert [r["id"] for r in records] == ["a", "b"]
        assert has_more is False
        assert "limit" not in seen[0].url.params

    @pytest.mark.asyncio
    async def test_get_forbidden_is_authorization_error(self, hostctl_config):
        """Test 403 maps to an authorization RemoteFetchError."""
        api = make_api(hostctl_config, lambda request: httpx.Response(403))

        with pytest.raises(RemoteFetchError) as exc_info:
            await api.get("organizations/o/features")

        assert exc_info.value.authorization is True
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_get_server_error_is_not_authorization(self, hostctl_config):
        """Test 500 maps to a plain RemoteFetchError."""
        api = make_api(hostctl_config, lambda request: httpx.Response(500))

        with pytest.raises(RemoteFetchError) as exc_info:
            await api.get("organizations/o/features")

        assert exc_info.value.authorization is False
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error(self, hostctl_config):
        """Test connection failures map to RemoteFetchError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        api = make_api(hostctl_config, handler)

        with pytest.raises(RemoteFetchError) as exc_info:
            await api.listing("users/u/memberships/organizations")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_mutate_returns_workflow(self, hostctl_config):
        """Test mutate posts the payload and returns the workflow."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": "wf-1", "type": "add_organization_site_membership"})

        api = make_api(hostctl_config, handler)
        body = await api.mutate("organizations/o/workflows", {"type": "add_organization_site_membership"})

        assert body["id"] == "wf-1"
        assert seen[0].method == "POST"
        assert b"add_organization_site_membership" in seen[0].content

    @pytest.mark.asyncio
    async def test_mutate_unauthorized(self, hostctl_config):
        """Test 401 on a mutation maps to an authorization RemoteMutationError."""
        api = make_api(hostctl_config, lambda request: httpx.Response(401))

        with pytest.raises(RemoteMutationError) as exc_info:
            await api.mutate("organizations/o/workflows", {})

        assert exc_info.value.authorization is True

    @pytest.mark.asyncio
    async def test_mutate_without_workflow(self, hostctl_config):
        """Test a mutation answered without a workflow is an error."""
        api = make_api(hostctl_config, lambda request: httpx.Response(200, json={"ok": True}))

        with pytest.raises(RemoteMutationError):
            await api.mutate("organizations/o/workflows", {})

    @pytest.mark.asyncio
    async def test_workflow_status_path(self, hostctl_config):
        """Test workflow polls go to the owner's workflow path."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": "wf-1", "result": "succeeded"})

        api = make_api(hostctl_config, handler)
        handle = WorkflowHandle(id="wf-1", owner_path="organizations/o")
        body = await api.workflow_status(handle)

        assert body["result"] == "succeeded"
        assert seen[0].url.path == "/api/organizations/o/workflows/wf-1"
