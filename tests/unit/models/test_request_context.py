"""Unit tests for the per-request admission context."""

from admission_router.models.context import RequestContext
from admission_router.models.pattern import WebhookType
from admission_router.models.resource import ResourceIdentifier


def admission_request(**overrides):
    request = {
        "uid": "705ab4f5-6393-11e8-b7cc-42010a800002",
        "kind": {"group": "apps", "version": "v1", "kind": "Deployment"},
        "resource": {"group": "apps", "version": "v1", "resource": "deployments"},
        "subResource": "scale",
        "operation": "UPDATE",
        "object": {"spec": {"replicas": 3}},
    }
    request.update(overrides)
    return request


class TestFromAdmissionRequest:
    """Test building contexts from deserialized admission reviews."""

    def test_resource_and_subresource(self):
        context = RequestContext.from_admission_request(
            "validating", admission_request()
        )

        assert context.webhook_type is WebhookType.VALIDATING
        assert context.resource == ResourceIdentifier(
            group="apps", version="v1", plural="deployments"
        )
        assert context.subresource == "scale"
        assert context.payload["uid"] == "705ab4f5-6393-11e8-b7cc-42010a800002"
        assert context.assigns == {}

    def test_core_group_without_subresource(self):
        request = admission_request(
            resource={"group": "", "version": "v1", "resource": "Pods"}
        )
        del request["subResource"]

        context = RequestContext.from_admission_request("mutating", request)

        assert context.resource == ResourceIdentifier(version="v1", plural="pods")
        assert context.subresource is None

    def test_empty_subresource_means_main_resource(self):
        context = RequestContext.from_admission_request(
            WebhookType.MUTATING, admission_request(subResource="")
        )

        assert context.subresource is None


class TestRequestContext:
    def test_assigns_are_per_instance(self):
        first = RequestContext(
            webhook_type="mutating",
            resource=ResourceIdentifier(version="v1", plural="pods"),
        )
        second = RequestContext(
            webhook_type="mutating",
            resource=ResourceIdentifier(version="v1", plural="pods"),
        )

        first.assigns["seen"] = True

        assert second.assigns == {}
