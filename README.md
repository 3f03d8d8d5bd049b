# cloudstore

Python models for the resources of the Cloud Storage JSON API: buckets, bucket
access-control lists (ACLs) and bucket IAM policies. Each resource is a plain
dataclass or enum. It can be built from the decoded JSON the service returns
(`from_json`) and turned back into the JSON the service expects (`to_json`).
Error documents from the service are parsed into exceptions.

The package uses only the standard library.

## Installation

```
pip install cloudstore
```

To run the test suite, install the test extra:

```
pip install "cloudstore[test]"
pytest
```

## What it does not do

The package sends no HTTP requests. It has no network client, does no
authentication or token handling, and does not upload or download anything.
You send requests with the HTTP library you prefer and pass the decoded JSON
bodies to the models here.

## Modules

- `cloudstore.bucket`: `Bucket` (a bucket as returned by the service) and
  `NewBucket` (the settings used to create one; only `name` is needed, and
  `location` defaults to `"US"`).
- `cloudstore.bucket_config`: the blocks a bucket is made of. These are
  `RetentionPolicy`, `IamConfiguration`, `UniformBucketLevelAccess`,
  `Encryption`, `Owner`, `Website`, `Logging`, `Versioning`, `Cors`,
  `Lifecycle`, `Rule`, `Action`, `Condition`, `Billing`, and the enums
  `StorageClass` and `ActionType`. The module also has two helpers,
  `parse_int` and `parse_optional_int`, which read integers that the service
  sends as decimal strings.
- `cloudstore.bucket_access_control`: `BucketAccessControl` (an ACL entry) and
  `NewBucketAccessControl` (entity plus role, used to create one).
- `cloudstore.common`: `Entity`, `EntityKind`, `Team`, `Role`, `ProjectTeam`
  and `ListResponse`, the page of items a list call returns.
- `cloudstore.iam`: `IamPolicy`, `Binding`, `IamCondition`,
  `TestIamPermission`, the role enums `StandardIamRole`, `PrimitiveIamRole` and
  `LegacyIamRole`, and `parse_iam_role`.
- `cloudstore.errors`: the exception types, the error-document models and
  `parse_google_response`.

## Buckets

```python
from cloudstore.bucket import Bucket, NewBucket
from cloudstore.bucket_config import StorageClass, Versioning

payload = NewBucket(
    name="my-example-bucket",
    versioning=Versioning(enabled=True),
    storage_class=StorageClass.NEARLINE,
).to_json()

bucket = Bucket.from_json(response_body)   # a decoded JSON object
print(bucket.name, bucket.project_number, bucket.time_created)
```

`Bucket.from_json` reads `projectNumber` and `metageneration` from their string
form. It parses timestamps as RFC 3339 and converts them to UTC. `to_json`
writes timestamps back with a trailing `Z`.

## Entities and ACLs

An `Entity` stands for a user, a group, a domain, a project team, all users or
all authenticated users. It converts to and from the text form the service
uses:

```python
from cloudstore.common import Entity, Role, Team
from cloudstore.bucket_access_control import NewBucketAccessControl

Entity.user_email("someone@example.com").to_json()   # "user-someone@example.com"
Entity.parse("project-viewers-my-project") == Entity.project(Team.VIEWERS, "my-project")

new_acl = NewBucketAccessControl(entity=Entity.all_users(), role=Role.READER)
new_acl.to_json()   # {"entity": "allUsers", "role": "READER"}
```

`Entity.parse` treats a `user-` or `group-` value that contains `@` as an
e-mail address and any other value as an id.

## IAM policies

```python
from cloudstore.iam import Binding, IamPolicy, StandardIamRole, parse_iam_role

policy = IamPolicy(
    version=1,
    bindings=[Binding(role=StandardIamRole.OBJECT_VIEWER, members=["allUsers"])],
)
policy.to_json()

parse_iam_role("roles/storage.legacyBucketReader")   # LegacyIamRole.LEGACY_BUCKET_READER
```

## Errors

Every exception is a `cloudstore.errors.StorageError`:

- `SerializationError` is raised when data does not have the expected shape.
- `GoogleStorageError` is raised for an error document from the service. Its
  `response` attribute holds the parsed `GoogleErrorResponse`.

`parse_google_response(data, parser)` first tries the success shape. If that
does not fit, it reads the data as an error document:

```python
from cloudstore.bucket import Bucket
from cloudstore.errors import GoogleStorageError, Reason, parse_google_response

try:
    bucket = parse_google_response(response_body, Bucket.from_json)
except GoogleStorageError as exc:
    if exc.errors_has_reason(Reason.NOT_FOUND):
        ...
```