# kubestatelogs

`kubestatelogs` turns Kubernetes objects into flat, structured records that
describe the state of a cluster: one record per object, as dataclass
instances ready to be serialised and shipped to a log pipeline.

Objects are given as plain dictionaries in the shape the Kubernetes API
returns them (`kind`, `metadata`, `spec`, `status`). They are kept in an
`ObjectStore`, and a resource handler turns what the store holds into records.

## Installation

```
pip install kubestatelogs
```

For running the tests:

```
pip install "kubestatelogs[test]"
pytest
```

## Usage

```python
from kubestatelogs.core import ObjectStore
from kubestatelogs.job import JobHandler

store = ObjectStore()
store.add({
    "kind": "Job",
    "metadata": {
        "name": "nightly-report",
        "namespace": "default",
        "creationTimestamp": "2024-01-01T00:00:00Z",
    },
    "spec": {"completions": 1, "parallelism": 1},
    "status": {
        "succeeded": 1,
        "conditions": [{"type": "Complete", "status": "True"}],
    },
})

handler = JobHandler(store)
for entry in handler.collect(["default"]):
    print(entry.name, entry.condition_complete, entry.backoff_limit)
```

### The store

`ObjectStore` is a thread-safe cache. It can be filled at construction
(`ObjectStore(objects)`) or with `add(obj)`. Objects are keyed by namespace
and name, so adding an object with the same namespace and name replaces the
earlier one. `list()` returns a snapshot of everything held; `len()` and
iteration work on the store as well.

### Handlers

`collect(namespaces)` returns one record per object in the store whose
`kind` matches the handler. An empty list (or `None`) means every namespace.
Objects of another kind, or values that are not mappings, are skipped. Every
record of one call carries the same `timestamp`.

A single object can be turned into a record directly with
`handler.create_log_entry(obj)`; this does not check the object's `kind`.

## Resources

| Module | Handler | Record |
| --- | --- | --- |
| `kubestatelogs.horizontalpodautoscaler` | `HorizontalPodAutoscalerHandler` | `HorizontalPodAutoscalerData` |
| `kubestatelogs.ingress` | `IngressHandler` | `IngressData` |
| `kubestatelogs.ingressclass` | `IngressClassHandler` | `IngressClassData` |
| `kubestatelogs.job` | `JobHandler` | `JobData` |
| `kubestatelogs.lease` | `LeaseHandler` | `LeaseData` |
| `kubestatelogs.limitrange` | `LimitRangeHandler` | `LimitRangeData` |
| `kubestatelogs.mutatingwebhookconfiguration` | `MutatingWebhookConfigurationHandler` | `MutatingWebhookConfigurationData` |
| `kubestatelogs.namespace` | `NamespaceHandler` | `NamespaceData` |
| `kubestatelogs.networkpolicy` | `NetworkPolicyHandler` | `NetworkPolicyData` |
| `kubestatelogs.node` | `NodeHandler` | `NodeData` |

Cluster-scoped resources (ingress classes, mutating webhook configurations and
nodes) ignore the namespace filter. Namespaces are filtered by their own name.

Some defaults follow Kubernetes: a horizontal pod autoscaler without
`minReplicas` reports `min_replicas` of 1, a job without `backoffLimit`
reports `backoff_limit` of 6, and a node without a phase reports `"Unknown"`.
An ingress reports `condition_load_balancer_ready` as `True` when it has a
load balancer entry and `None` otherwise. A network policy port given by name
is reported as port 0; the ingress rule's peers are in the `from_` field.

## Records

Every record starts with the shared metadata from `LogEntryMetadata`:
`timestamp`, `resource_type`, `name`, `namespace`, `created_timestamp` (Unix
seconds, 0 when absent), `labels`, `annotations`, `created_by_kind` and
`created_by_name` (taken from the first owner reference).

Condition fields are `True` or `False` for the statuses `"True"` and
`"False"`, and `None` for anything else. Conditions with no field of their
own go into the record's `conditions` mapping.

Timestamps may be RFC 3339 strings, epoch seconds or `datetime` objects; they
become timezone-aware datetimes (UTC when no zone is given). A string that
cannot be parsed raises `ValueError`, and a value of another type raises
`TypeError`.

Helpers in `kubestatelogs.core` are available for your own handlers:
`should_include_namespace`, `convert_condition_status`,
`owner_reference_info`, `parse_timestamp` and `extract_metadata`. A new
handler subclasses `ResourceHandler`, sets `kind` (and `namespaced = False`
for cluster-scoped kinds) and implements `create_log_entry`.

## What this package does not do

It does not talk to a Kubernetes cluster: it neither lists nor watches
objects, so filling the `ObjectStore` is up to the caller. It does not write
or send logs either, and it has no command-line program; it only builds the
records.