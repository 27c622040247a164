# SPDX-License-Identifier: Apache-2.0
"""Tests for the caching object store."""

# Standard
from pathlib import Path

# Third Party
import httpx

# First Party
from oml_hub import get_flow
from oml_hub.core.store import ObjectStore
from oml_hub.core.utils.error_handling import NotCachedError, ServerError
import pytest

ERROR_XML = """<oml:error xmlns:oml="http://openml.org/openml">
  <oml:code>181</oml:code>
  <oml:message>Unknown flow</oml:message>
  <oml:additional_information>No flow with id 99</oml:additional_information>
</oml:error>"""


class RecordingHandler:
    """Serve canned responses by URL path and record every request."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, b"not found"))
        return httpx.Response(status, content=body)


@pytest.fixture
def make_store(oml_config):
    """Build a store whose client is backed by a RecordingHandler."""
    clients = []

    def _make_store(routes):
        handler = RecordingHandler(routes)
        client = httpx.Client(transport=httpx.MockTransport(handler))
        store = ObjectStore(oml_config, client=client)
        clients.append(client)
        return store, handler

    yield _make_store

    for client in clients:
        client.close()


class TestFetch:
    """Test ObjectStore.fetch."""

    def test_download_populates_cache(self, make_store, flow_xml):
        """Test a cache miss downloads and stores the document."""
        store, handler = make_store({"/api/v1/xml/flow/5804": (200, flow_xml())})

        result = store.fetch("flow", 5804)

        assert len(handler.requests) == 1
        assert store.is_cached("flow", 5804)
        assert list(result.files) == ["flow.xml"]
        assert Path(result.files["flow.xml"].path).is_file()
        assert result.doc.tag.endswith("flow")

    def test_second_fetch_uses_cache(self, make_store, flow_xml):
        """Test repeated retrieval performs no further requests."""
        store, handler = make_store({"/api/v1/xml/flow/5804": (200, flow_xml())})

        first = get_flow(5804, store=store)
        second = get_flow(5804, store=store)

        assert len(handler.requests) == 1
        assert first == second

    def test_cache_only_miss(self, make_store):
        """Test cache-only mode fails without contacting the server."""
        store, handler = make_store({})

        with pytest.raises(NotCachedError):
            store.fetch("flow", 1, cache_only=True)
        assert handler.requests == []

    def test_cache_only_hit(self, make_store, flow_xml):
        """Test cache-only mode serves cached flows."""
        store, handler = make_store({"/api/v1/xml/flow/5804": (200, flow_xml())})
        store.fetch("flow", 5804)

        flow = get_flow(5804, cache_only=True, store=store)

        assert flow.flow_id == 5804
        assert len(handler.requests) == 1

    def test_api_key_sent(self, make_store, flow_xml, oml_config):
        """Test the configured API key is passed as a query parameter."""
        oml_config.api_key = "secret"
        store, handler = make_store({"/api/v1/xml/flow/5804": (200, flow_xml())})

        store.fetch("flow", 5804)

        assert handler.requests[0].url.params["api_key"] == "secret"

    def test_binary_artifact_downloaded(self, make_store, flow_xml):
        """Test a flow's binary artifact is cached and flagged binary."""
        xml = flow_xml(
            extra="<oml:binary_url>https://files.openml.org/5804/model.zip</oml:binary_url>"
        )
        store, handler = make_store(
            {
                "/api/v1/xml/flow/5804": (200, xml),
                "/5804/model.zip": (200, b"PK\x03\x04"),
            }
        )

        flow = get_flow(5804, store=store)

        assert len(handler.requests) == 2
        assert flow.binary_path is not None
        assert flow.binary_path.endswith("binary.zip")
        assert Path(flow.binary_path).read_bytes() == b"PK\x03\x04"
        assert flow.source_path is None

    def test_source_artifact_downloaded(self, make_store, flow_xml):
        """Test a source artifact is attached as source_path."""
        xml = flow_xml(
            extra="<oml:source_url>https://files.openml.org/5804/flow.R</oml:source_url>"
        )
        store, _ = make_store(
            {
                "/api/v1/xml/flow/5804": (200, xml),
                "/5804/flow.R": (200, b"library(rpart)"),
            }
        )

        flow = get_flow(5804, store=store)

        assert flow.source_path.endswith("source.R")
        assert flow.binary_path is None

    def test_server_error_document(self, make_store):
        """Test <oml:error> responses raise ServerError with the code."""
        store, _ = make_store({"/api/v1/xml/flow/99": (412, ERROR_XML)})

        with pytest.raises(ServerError) as exc_info:
            store.fetch("flow", 99)

        assert exc_info.value.code == 181
        assert "Unknown flow" in str(exc_info.value)
        assert not store.is_cached("flow", 99)

    def test_http_error(self, make_store):
        """Test plain HTTP failures raise ServerError with the status."""
        store, _ = make_store({"/api/v1/xml/flow/7": (500, b"boom")})

        with pytest.raises(ServerError) as exc_info:
            store.fetch("flow", 7)

        assert exc_info.value.code == 500

    def test_transport_error_retried(self, oml_config, flow_xml):
        """Test transient transport failures are retried."""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, content=flow_xml())

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            store = ObjectStore(oml_config, client=client)
            result = store.fetch("flow", 5804)

        assert len(calls) == 2
        assert "flow.xml" in result.files

    def test_transport_error_exhausted(self, oml_config):
        """Test persistent transport failures surface as ServerError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            store = ObjectStore(oml_config, client=client)
            with pytest.raises(ServerError, match="Could not reach"):
                store.fetch("flow", 5804)


class TestClearCache:
    """Test ObjectStore.clear_cache."""

    def test_clear_single_object(self, make_store, flow_xml):
        """Test removing one cached flow."""
        store, _ = make_store(
            {
                "/api/v1/xml/flow/1": (200, flow_xml(flow_id=1)),
                "/api/v1/xml/flow/2": (200, flow_xml(flow_id=2)),
            }
        )
        store.fetch("flow", 1)
        store.fetch("flow", 2)

        store.clear_cache("flow", 1)

        assert not store.is_cached("flow", 1)
        assert store.is_cached("flow", 2)

    def test_clear_everything(self, make_store, flow_xml):
        """Test removing the whole cache."""
        store, _ = make_store({"/api/v1/xml/flow/1": (200, flow_xml(flow_id=1))})
        store.fetch("flow", 1)

        store.clear_cache()

        assert not store.config.cache_path.exists()

    def test_object_id_requires_kind(self, oml_config):
        """Test an id without a kind is rejected."""
        with ObjectStore(oml_config) as store:
            with pytest.raises(ValueError):
                store.clear_cache(object_id=1)
