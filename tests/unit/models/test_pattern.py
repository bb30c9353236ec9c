"""Unit tests for match pattern building and matching."""

import pytest

from admission_router.errors import ConfigError, ParseError
from admission_router.models.context import RequestContext
from admission_router.models.pattern import Pattern, WebhookType, build_pattern
from admission_router.models.resource import ResourceIdentifier, parse_resource


def make_context(
    webhook_type="mutating", resource="v1/pods", subresource=None
) -> RequestContext:
    return RequestContext(
        webhook_type=webhook_type,
        resource=parse_resource(resource),
        subresource=subresource,
    )


class TestBuildPattern:
    """Test building patterns from handler declarations."""

    def test_without_subresource(self):
        pattern = build_pattern("mutating", "v1/pods")

        assert pattern.webhook_type is WebhookType.MUTATING
        assert pattern.resource == parse_resource("v1/pods")
        assert pattern.subresource is None

    def test_with_subresource(self):
        pattern = build_pattern(WebhookType.VALIDATING, "example.com/v1/widgets", "scale")

        assert pattern.webhook_type is WebhookType.VALIDATING
        assert pattern.resource.group == "example.com"
        assert pattern.subresource == "scale"

    def test_malformed_resource_raises_config_error(self):
        """Parse failures surface as configuration errors naming the input."""
        with pytest.raises(ConfigError) as exc_info:
            build_pattern("mutating", "bad")

        error = exc_info.value
        assert error.value == "bad"
        assert "'bad'" in str(error)
        assert "group/version/plural" in str(error)
        assert "version/plural" in str(error)
        assert isinstance(error.__cause__, ParseError)

    def test_unknown_webhook_type_raises_config_error(self):
        with pytest.raises(ConfigError) as exc_info:
            build_pattern("auditing", "v1/pods")

        assert "auditing" in str(exc_info.value)

    def test_pattern_is_immutable(self):
        pattern = build_pattern("mutating", "v1/pods")

        with pytest.raises(Exception):
            pattern.subresource = "status"

    def test_string_form(self):
        assert str(build_pattern("mutating", "v1/pods")) == "mutating/v1/pods"
        assert (
            str(build_pattern("validating", "apps/v1/deployments", "scale"))
            == "validating/apps/v1/deployments/scale"
        )


class TestPatternMatching:
    """Test the field-by-field match predicate."""

    @pytest.mark.parametrize("subresource", [None, "scale", "status", "eviction"])
    def test_wildcard_subresource_matches_any(self, subresource):
        """A pattern without subresource matches every subresource, or none."""
        pattern = build_pattern("mutating", "v1/pods")

        assert pattern.matches(make_context(subresource=subresource))

    def test_exact_subresource_matches_only_itself(self):
        pattern = build_pattern("mutating", "apps/v1/deployments", "scale")

        assert pattern.matches(
            make_context(resource="apps/v1/deployments", subresource="scale")
        )
        assert not pattern.matches(make_context(resource="apps/v1/deployments"))
        assert not pattern.matches(
            make_context(resource="apps/v1/deployments", subresource="status")
        )

    def test_webhook_type_must_match(self):
        pattern = build_pattern("mutating", "v1/pods")

        assert not pattern.matches(make_context(webhook_type="validating"))

    @pytest.mark.parametrize(
        "resource", ["v1/services", "v2/pods", "apps/v1/pods", "example.com/v1/pods"]
    )
    def test_resource_must_match(self, resource):
        pattern = build_pattern("mutating", "v1/pods")

        assert not pattern.matches(make_context(resource=resource))

    def test_pattern_equality_by_value(self):
        assert build_pattern("mutating", "v1/Pods") == Pattern(
            webhook_type="mutating", resource=parse_resource("v1/pods")
        )

    def test_request_plural_case_is_normalized_by_model(self):
        """Contexts lower-case their plural, so a mixed-case request matches."""
        pattern = build_pattern("mutating", "v1/pods")
        context = RequestContext(
            webhook_type="mutating",
            resource=ResourceIdentifier(version="v1", plural="Pods"),
        )

        assert context.resource.plural == "pods"
        assert pattern.matches(context)
