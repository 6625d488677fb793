from __future__ import annotations

import pytest

from massaction.config import OrgSettings
from massaction.discovery.discovery_errors import DiscoveryError, UnknownEndpointError
from massaction.discovery.discovery_service import CapabilityDiscoveryService
from massaction.discovery.discovery_strategies import strategy_for
from massaction.domain import Category
from massaction.domain.discovered import DiscoveredInput, PicklistEntry
from massaction.endpoints.endpoints_registry import EndpointRegistry, NamedEndpoint
from massaction.org.org_client import OrgClient
from tests.mocks.remote import FakeRestApi

pytestmark = pytest.mark.unit

ENDPOINT = "Mass_Action"


def build_service(remote: FakeRestApi, org: FakeRestApi) -> CapabilityDiscoveryService:
    registry = EndpointRegistry(
        endpoints={
            ENDPOINT: NamedEndpoint(
                name=ENDPOINT,
                label="Mass Action",
                base_url="https://remote.example.test",
                token="remote-token",
            )
        }
    )
    org_client = OrgClient.from_settings(
        OrgSettings(
            base_url="https://local.example.test",
            access_token="org-token",
            api_version="58.0",
            timeout_seconds=5,
        ),
        transport=org.transport(),
    )
    return CapabilityDiscoveryService(
        endpoints=registry,
        org=org_client,
        timeout_seconds=5,
        transport=remote.transport(),
    )


def global_describe(*objects: tuple[str, str]) -> dict:
    return {"sobjects": [{"name": name, "label": label} for name, label in objects]}


@pytest.mark.asyncio
async def test_capable_objects_are_resolved_sorted_and_filtered() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get(
        "actions/custom/emailAlert",
        {"Contact": "/contact", "Zeta__c": "/zeta", "Account": "/account", "Ghost__c": "/ghost"},
    )
    org.on_get(
        "sobjects",
        global_describe(("Account", "Account"), ("Contact", "Contact"), ("Zeta__c", "Alpha Thing")),
    )
    service = build_service(remote, org)

    entries = await service.list_capable_objects(ENDPOINT, Category.EMAIL_ALERT)

    assert entries == [
        PicklistEntry(label="Account", value="Account"),
        PicklistEntry(label="Alpha Thing", value="Zeta__c"),
        PicklistEntry(label="Contact", value="Contact"),
    ]
    assert remote.requests[0].headers["Authorization"] == "Bearer remote-token"


@pytest.mark.asyncio
async def test_equal_labels_fall_back_to_ordinal_value_order() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get("actions/custom/emailAlert", {"b": "/b", "B": "/B", "a": "/a"})
    org.on_get("sobjects", global_describe(("b", "Same"), ("B", "Same"), ("a", "Same")))
    service = build_service(remote, org)

    entries = await service.list_capable_objects(ENDPOINT, Category.EMAIL_ALERT)

    assert [entry.value for entry in entries] == ["B", "a", "b"]
    assert {entry.label for entry in entries} == {"Same"}


@pytest.mark.asyncio
async def test_global_categories_have_no_capable_objects() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    service = build_service(remote, org)

    assert await service.list_capable_objects(ENDPOINT, Category.FLOW) == []
    assert await service.list_capable_objects(ENDPOINT, "Apex") == []
    assert remote.requests == []
    assert org.requests == []


@pytest.mark.asyncio
async def test_flow_operations_keep_remote_order() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get(
        "actions/custom/flow",
        {
            "actions": [
                {"name": "Zeta_Flow", "label": "Zeta"},
                {"name": "Alpha_Flow", "label": "Alpha"},
                {"name": "Unlabelled_Flow"},
            ]
        },
    )
    service = build_service(remote, org)

    entries = await service.list_operations(ENDPOINT, Category.FLOW)

    assert [entry.value for entry in entries] == ["Zeta_Flow", "Alpha_Flow", "Unlabelled_Flow"]
    assert entries[2].label == "Unlabelled_Flow"


@pytest.mark.asyncio
async def test_object_scoped_operations_require_object_name() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    service = build_service(remote, org)

    assert await service.list_operations(ENDPOINT, Category.EMAIL_ALERT, None) == []
    assert await service.list_operations(ENDPOINT, Category.QUICK_ACTION, "") == []
    assert remote.requests == []


@pytest.mark.asyncio
async def test_object_scoped_operations_are_listed_per_object() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get(
        "actions/custom/quickAction/Case",
        {"actions": [{"name": "Case.Escalate", "label": "Escalate"}]},
    )
    service = build_service(remote, org)

    entries = await service.list_operations(ENDPOINT, Category.QUICK_ACTION, "Case")

    assert entries == [PicklistEntry(label="Escalate", value="Case.Escalate")]


@pytest.mark.asyncio
async def test_email_alert_inputs_strip_object_prefix_and_normalise_types() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get(
        "actions/custom/emailAlert/Contact/Notify",
        {
            "inputs": [
                {"name": "SObjectRowId", "label": "Record ID", "type": "id", "required": "true"},
                {
                    "name": "Subject",
                    "label": "Subject",
                    "type": "string",
                    "required": False,
                    "description": "Mail subject",
                },
            ]
        },
    )
    service = build_service(remote, org)

    inputs = await service.list_operation_inputs(
        ENDPOINT, Category.EMAIL_ALERT, "Contact.Notify", "Contact"
    )

    assert inputs == [
        DiscoveredInput(label="Record ID", name="SObjectRowId", data_type="ID", required=True),
        DiscoveredInput(
            label="Subject",
            name="Subject",
            data_type="STRING",
            required=False,
            description="Mail subject",
        ),
    ]


@pytest.mark.asyncio
async def test_workflow_inputs_are_synthetic_and_need_no_endpoint() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    service = build_service(remote, org)

    expected = [
        DiscoveredInput(label="Record ID", name="ContextId", data_type="ID", required=True)
    ]
    for operation_name, object_name in [("Any Rule", "Account"), ("", None), ("Other", "Lead")]:
        inputs = await service.list_operation_inputs(
            "Not_Configured", Category.WORKFLOW, operation_name, object_name
        )
        assert inputs == expected
    assert remote.requests == []


@pytest.mark.asyncio
async def test_workflow_objects_and_rules_use_tooling_queries() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_query(
        "FROM WorkflowRule WHERE TableEnumOrId = 'Account'",
        [{"Id": "01Q1", "Name": "Close Stale"}, {"Id": "01Q2", "Name": "Notify Owner"}],
        resource="tooling/query",
    )
    remote.on_query(
        "SELECT TableEnumOrId FROM WorkflowRule",
        [{"TableEnumOrId": "Account"}, {"TableEnumOrId": "Account"}, {"TableEnumOrId": "Lead"}],
        resource="tooling/query",
    )
    org.on_get("sobjects", global_describe(("Account", "Account"), ("Lead", "Lead")))
    service = build_service(remote, org)

    objects = await service.list_capable_objects(ENDPOINT, Category.WORKFLOW)
    rules = await service.list_operations(ENDPOINT, Category.WORKFLOW, "Account")

    assert [entry.value for entry in objects] == ["Account", "Lead"]
    assert [entry.value for entry in rules] == ["Close Stale", "Notify Owner"]


@pytest.mark.asyncio
async def test_unknown_endpoint_is_reported() -> None:
    service = build_service(FakeRestApi(), FakeRestApi())

    with pytest.raises(UnknownEndpointError):
        await service.list_operations("Missing", Category.FLOW)


@pytest.mark.asyncio
async def test_remote_failure_is_raised_as_discovery_error() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get(
        "actions/custom/apex",
        [{"errorCode": "INVALID_SESSION_ID", "message": "Session expired"}],
        status_code=401,
    )
    service = build_service(remote, org)

    with pytest.raises(DiscoveryError) as exc_info:
        await service.list_operations(ENDPOINT, Category.APEX)

    assert "INVALID_SESSION_ID" in str(exc_info.value)


@pytest.mark.asyncio
async def test_malformed_action_listing_is_rejected() -> None:
    remote, org = FakeRestApi(), FakeRestApi()
    remote.on_get("actions/custom/flow", {"actions": [{"label": "no name"}]})
    service = build_service(remote, org)

    with pytest.raises(DiscoveryError):
        await service.list_operations(ENDPOINT, Category.FLOW)


def test_every_category_has_a_strategy() -> None:
    for category in Category:
        assert strategy_for(category) is strategy_for(category.value)


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(DiscoveryError, match="Unsupported category"):
        strategy_for("Bogus")


@pytest.mark.asyncio
async def test_unknown_category_is_rejected_by_the_service() -> None:
    service = build_service(FakeRestApi(), FakeRestApi())

    with pytest.raises(DiscoveryError, match="Unsupported category"):
        await service.list_operations(ENDPOINT, "Bogus")
