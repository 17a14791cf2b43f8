from dtcredentials.models import OneAgent, ProxySettings


def test_from_resource_reads_metadata_and_spec() -> None:
    body = {
        "apiVersion": "dynatrace.com/v1alpha1",
        "kind": "OneAgent",
        "metadata": {"name": "oneagent", "namespace": "dynatrace"},
        "spec": {
            "apiUrl": "https://tenant.live.dynatrace.com/api",
            "skipCertCheck": True,
            "tokens": "my-tokens",
            "proxy": {"valueFrom": "proxy-secret"},
            "image": "ignored",
        },
    }

    instance = OneAgent.from_resource(body)

    assert instance.name == "oneagent"
    assert instance.namespace == "dynatrace"
    assert instance.api_url == "https://tenant.live.dynatrace.com/api"
    assert instance.skip_cert_check is True
    assert instance.tokens == "my-tokens"
    assert instance.proxy == ProxySettings(value_from="proxy-secret")


def test_blank_optional_fields_become_none() -> None:
    instance = OneAgent.from_resource(
        {
            "metadata": {"name": "oneagent", "namespace": "dynatrace"},
            "spec": {"apiUrl": "https://x", "tokens": "", "proxy": {"value": " ", "valueFrom": ""}},
        }
    )

    assert instance.tokens is None
    assert instance.skip_cert_check is False
    assert instance.proxy is not None
    assert instance.proxy.value is None
    assert instance.proxy.value_from is None
