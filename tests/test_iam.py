import pytest

from cloudstore import iam
from cloudstore.errors import SerializationError
from cloudstore.iam import (
    Binding,
    IamCondition,
    IamPolicy,
    LegacyIamRole,
    PrimitiveIamRole,
    StandardIamRole,
    parse_iam_role,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("roles/storage.objectViewer", StandardIamRole.OBJECT_VIEWER),
        ("roles/storage.admin", StandardIamRole.ADMIN),
        ("role/editor", PrimitiveIamRole.EDITOR),
        ("roles/storage.legacyBucketOwner", LegacyIamRole.LEGACY_BUCKET_OWNER),
    ],
)
def test_parse_iam_role_known_names(name, expected):
    assert parse_iam_role(name) is expected


@pytest.mark.parametrize("role", list(StandardIamRole) + list(PrimitiveIamRole) + list(LegacyIamRole))
def test_parse_iam_role_round_trip(role):
    assert parse_iam_role(role.value) is role


@pytest.mark.parametrize("bad", ["roles/storage.nothing", "", 5, None])
def test_parse_iam_role_rejects_unknown(bad):
    with pytest.raises(SerializationError):
        parse_iam_role(bad)


def test_binding_from_json_without_condition():
    binding = Binding.from_json({"role": "roles/storage.objectViewer", "members": ["allUsers"]})
    assert binding.role is StandardIamRole.OBJECT_VIEWER
    assert binding.members == ["allUsers"]
    assert binding.condition is None


def test_binding_round_trip_with_condition():
    binding = Binding(
        role=LegacyIamRole.LEGACY_OBJECT_READER,
        members=["user:someone@example.com", "allAuthenticatedUsers"],
        condition=IamCondition(
            title="expires_end_of_2018",
            expression="request.time < timestamp('2019-01-01T00:00:00Z')",
            description="Expires at midnight on 2018-12-31",
        ),
    )
    assert Binding.from_json(binding.to_json()) == binding


def test_binding_rejects_non_string_member():
    with pytest.raises(SerializationError):
        Binding.from_json({"role": "role/owner", "members": [1]})


def test_binding_requires_members():
    with pytest.raises(SerializationError):
        Binding.from_json({"role": "role/owner"})


def test_condition_requires_expression():
    with pytest.raises(SerializationError):
        IamCondition.from_json({"title": "t"})


def test_condition_to_json_keys():
    condition = IamCondition(title="t", expression="e")
    assert condition.to_json() == {"title": "t", "description": None, "expression": "e"}


def test_policy_defaults():
    policy = IamPolicy()
    assert policy.version == 0
    assert policy.bindings == []
    assert policy.etag == ""
    assert policy.kind is None and policy.resource_id is None


def test_policy_to_json_uses_wire_names():
    policy = IamPolicy(
        version=1,
        resource_id="projects/_/buckets/demo",
        bindings=[Binding(role=StandardIamRole.OBJECT_VIEWER, members=["allUsers"])],
    )
    data = policy.to_json()
    assert data["resourceId"] == "projects/_/buckets/demo"
    assert data["bindings"][0]["role"] == "roles/storage.objectViewer"
    assert data["version"] == 1


def test_policy_round_trip():
    policy = IamPolicy(
        version=1,
        kind="storage#policy",
        resource_id="projects/_/buckets/demo",
        bindings=[
            Binding(role=StandardIamRole.OBJECT_VIEWER, members=["allUsers"]),
            Binding(role=PrimitiveIamRole.OWNER, members=["projectOwner:demo"]),
        ],
        etag="CAE=",
    )
    assert IamPolicy.from_json(policy.to_json()) == policy


def test_policy_bindings_compare_after_round_trip():
    bindings = [Binding(role=StandardIamRole.OBJECT_VIEWER, members=["allUsers"])]
    policy = IamPolicy(bindings=bindings)
    assert IamPolicy.from_json(policy.to_json()).bindings == bindings


@pytest.mark.parametrize(
    "data",
    [
        {"bindings": [], "etag": ""},
        {"version": True, "bindings": [], "etag": ""},
        {"version": 1, "etag": ""},
        {"version": 1, "bindings": []},
        [],
    ],
)
def test_policy_rejects_malformed(data):
    with pytest.raises(SerializationError):
        IamPolicy.from_json(data)


def test_permission_from_json():
    result = iam.TestIamPermission.from_json(
        {"kind": "storage#testIamPermissionsResponse", "permissions": ["storage.buckets.get"]}
    )
    assert result.kind == "storage#testIamPermissionsResponse"
    assert result.permissions == ["storage.buckets.get"]


def test_permission_requires_kind():
    with pytest.raises(SerializationError):
        iam.TestIamPermission.from_json({"permissions": []})