from datetime import datetime, timezone

from kubestatelogs.core import ObjectStore
from kubestatelogs.node import NodeData, NodeHandler, TaintData


def make_node(name, ready_status="True"):
    return {
        "kind": "Node",
        "metadata": {
            "name": name,
            "labels": {
                "kubernetes.io/hostname": name,
                "node-role.kubernetes.io/worker": "",
            },
            "annotations": {"description": "test node"},
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "generation": 1,
        },
        "spec": {
            "unschedulable": False,
            "taints": [
                {"key": "node.kubernetes.io/not-ready", "value": "true", "effect": "NoSchedule"}
            ],
        },
        "status": {
            "phase": "Running",
            "addresses": [
                {"type": "InternalIP", "address": "192.168.1.100"},
                {"type": "ExternalIP", "address": "203.0.113.1"},
                {"type": "Hostname", "address": name},
            ],
            "capacity": {"cpu": "4", "memory": "8Gi", "pods": "110"},
            "allocatable": {"cpu": "4", "memory": "8Gi", "pods": "110"},
            "conditions": [
                {"type": "Ready", "status": ready_status, "reason": "KubeletReady"},
                {"type": "MemoryPressure", "status": "False"},
                {"type": "DiskPressure", "status": "False"},
                {"type": "PIDPressure", "status": "False"},
            ],
            "nodeInfo": {
                "architecture": "amd64",
                "operatingSystem": "linux",
                "kernelVersion": "5.4.0-42-generic",
                "kubeletVersion": "v1.24.0",
                "kubeProxyVersion": "v1.24.0",
                "containerRuntimeVersion": "containerd://1.6.0",
            },
        },
    }


def test_new_handler_has_empty_store():
    handler = NodeHandler()
    assert handler.collect([]) == []
    assert len(handler.store) == 0


def test_collect_returns_all_nodes():
    store = ObjectStore([make_node("test-node-1", "True"), make_node("test-node-2", "False")])
    entries = NodeHandler(store).collect([])
    assert len(entries) == 2
    assert all(isinstance(entry, NodeData) for entry in entries)
    assert sorted(entry.name for entry in entries) == ["test-node-1", "test-node-2"]


def test_collect_ignores_namespace_filter_for_cluster_scoped_nodes():
    store = ObjectStore([make_node("a"), make_node("b")])
    entries = NodeHandler(store).collect(["default"])
    assert len(entries) == 2


def test_collect_empty_cache():
    assert NodeHandler(ObjectStore()).collect([]) == []


def test_collect_skips_other_kinds():
    store = ObjectStore([{"kind": "Pod", "metadata": {"name": "p", "namespace": "default"}}])
    assert NodeHandler(store).collect([]) == []


def test_collect_uses_shared_list_timestamp():
    store = ObjectStore([make_node("a"), make_node("b")])
    entries = NodeHandler(store).collect([])
    assert entries[0].timestamp == entries[1].timestamp


def test_create_log_entry():
    entry = NodeHandler().create_log_entry(make_node("test-node"))
    assert entry.resource_type == "node"
    assert entry.name == "test-node"
    assert entry.namespace == ""
    assert entry.ready is True
    assert entry.internal_ip == "192.168.1.100"
    assert entry.external_ip == "203.0.113.1"
    assert entry.hostname == "test-node"
    assert entry.kernel_version == "5.4.0-42-generic"
    assert entry.operating_system == "linux"
    assert entry.architecture == "amd64"
    assert entry.kubelet_version == "v1.24.0"
    assert entry.kube_proxy_version == "v1.24.0"
    assert entry.container_runtime_version == "containerd://1.6.0"
    assert entry.labels["kubernetes.io/hostname"] == "test-node"
    assert entry.annotations["description"] == "test node"
    assert entry.created_timestamp == int(
        datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp()
    )


def test_create_log_entry_resources_and_conditions():
    entry = NodeHandler().create_log_entry(make_node("test-node"))
    assert entry.capacity == {"cpu": "4", "memory": "8Gi", "pods": "110"}
    assert entry.allocatable == {"cpu": "4", "memory": "8Gi", "pods": "110"}
    assert entry.conditions == {
        "MemoryPressure": False,
        "DiskPressure": False,
        "PIDPressure": False,
    }
    assert "Ready" not in entry.conditions
    assert entry.phase == "Running"
    assert entry.role == "worker"
    assert entry.unschedulable is False
    assert entry.deletion_timestamp is None


def test_create_log_entry_not_ready():
    entry = NodeHandler().create_log_entry(make_node("test-node", "False"))
    assert entry.ready is False


def test_create_log_entry_unknown_ready_status():
    entry = NodeHandler().create_log_entry(make_node("test-node", "Unknown"))
    assert entry.ready is None


def test_create_log_entry_with_owner_reference():
    node = make_node("test-node")
    node["metadata"]["ownerReferences"] = [
        {
            "apiVersion": "cluster.x-k8s.io/v1beta1",
            "kind": "Machine",
            "name": "test-machine",
            "uid": "test-uid",
        }
    ]
    entry = NodeHandler().create_log_entry(node)
    assert entry.created_by_kind == "Machine"
    assert entry.created_by_name == "test-machine"


def test_create_log_entry_with_taints():
    node = make_node("test-node")
    node["spec"]["taints"] = [
        {"key": "node-role.kubernetes.io/master", "value": "", "effect": "NoSchedule"},
        {"key": "dedicated", "value": "gpu", "effect": "PreferNoSchedule"},
    ]
    entry = NodeHandler().create_log_entry(node)
    assert len(entry.taints) == 2
    assert entry.taints[0].key == "node-role.kubernetes.io/master"
    assert entry.taints[0].effect == "NoSchedule"
    assert entry.taints[1] == TaintData(key="dedicated", value="gpu", effect="PreferNoSchedule")


def test_missing_phase_defaults_to_unknown():
    node = make_node("test-node")
    del node["status"]["phase"]
    assert NodeHandler().create_log_entry(node).phase == "Unknown"


def test_role_ignores_bare_prefix_and_other_labels():
    node = make_node("test-node")
    node["metadata"]["labels"] = {
        "node-role.kubernetes.io/": "",
        "other": "x",
        "node-role.kubernetes.io/control-plane": "",
    }
    assert NodeHandler().create_log_entry(node).role == "control-plane"


def test_no_role_label_gives_empty_role():
    node = make_node("test-node")
    node["metadata"]["labels"] = {"kubernetes.io/hostname": "test-node"}
    assert NodeHandler().create_log_entry(node).role == ""


def test_unschedulable_and_deletion_timestamp():
    node = make_node("test-node")
    node["spec"]["unschedulable"] = True
    node["metadata"]["deletionTimestamp"] = "2024-02-03T04:05:06Z"
    entry = NodeHandler().create_log_entry(node)
    assert entry.unschedulable is True
    assert entry.deletion_timestamp == datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


def test_minimal_node_defaults():
    entry = NodeHandler().create_log_entry({"kind": "Node", "metadata": {"name": "bare"}})
    assert entry.name == "bare"
    assert entry.ready is None
    assert entry.capacity == {}
    assert entry.taints == []
    assert entry.internal_ip == ""
    assert entry.phase == "Unknown"
    assert entry.created_timestamp == 0