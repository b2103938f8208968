"""
GCP static pricing — approximate on-demand list prices, us-central1.
"""
from typing import Optional

from tfscan.models.estimate import HOURS_PER_MONTH, Quote
from tfscan.models.resource import Resource
from tfscan.pricing.common import num, text

GCE_PRICING = {
    "e2-micro": 6.11, "e2-small": 12.23, "e2-medium": 24.46,
    "e2-standard-2": 48.92, "e2-standard-4": 97.83, "e2-standard-8": 195.67,
    "e2-standard-16": 391.34,
    "n1-standard-1": 34.67, "n1-standard-2": 69.35, "n1-standard-4": 138.70,
    "n1-standard-8": 277.40, "n1-standard-16": 554.79,
    "n2-standard-2": 71.54, "n2-standard-4": 143.08, "n2-standard-8": 286.16,
    "n2-standard-16": 572.32,
    "n2d-standard-2": 62.27, "n2d-standard-4": 124.54, "n2d-standard-8": 249.08,
    "c2-standard-4": 152.44, "c2-standard-8": 304.88, "c2-standard-16": 609.77,
    "n1-highmem-2": 93.46, "n1-highmem-4": 186.93, "n1-highmem-8": 373.85,
    "f1-micro": 3.88, "g1-small": 13.13,
}

CLOUD_SQL_PRICING = {
    "db-f1-micro": 7.67, "db-g1-small": 25.55,
    "db-n1-standard-1": 51.10, "db-n1-standard-2": 102.20, "db-n1-standard-4": 204.40,
    "db-n1-standard-8": 408.80, "db-n1-standard-16": 817.60,
    "db-n1-highmem-2": 117.80, "db-n1-highmem-4": 235.61, "db-n1-highmem-8": 471.22,
    "db-custom-1-3840": 51.10, "db-custom-2-7680": 102.20, "db-custom-4-15360": 204.40,
}

# per GB-month
DISK_PRICING = {
    "pd-standard": 0.04, "pd-balanced": 0.10, "pd-ssd": 0.17, "pd-extreme": 0.125,
}

_FLAT = {
    "google_storage_bucket":                 (2.00, "GCS Standard (estimated 100GB baseline)"),
    "google_compute_forwarding_rule":        (18.25, "Forwarding rule"),
    "google_compute_global_forwarding_rule": (18.25, "Forwarding rule"),
    "google_compute_address":                (7.30, "Static IP (cost if unused)"),
    "google_compute_global_address":         (7.30, "Static IP (cost if unused)"),
    "google_artifact_registry_repository":   (1.00, "Artifact Registry (estimated 10GB)"),
    "google_dataflow_job":                   (50.00, "Dataflow job (estimated baseline)"),
    "google_sql_database":                   (0.0, "Cloud SQL database (no additional cost)"),
    "google_cloud_run_service":              (0.0, "Cloud Run (usage-based)"),
    "google_cloud_run_v2_service":           (0.0, "Cloud Run (usage-based)"),
    "google_cloudfunctions_function":        (0.0, "Cloud Functions (usage-based)"),
    "google_cloudfunctions2_function":       (0.0, "Cloud Functions (usage-based)"),
    "google_pubsub_topic":                   (0.0, "Pub/Sub topic (usage-based)"),
    "google_pubsub_subscription":            (0.0, "Pub/Sub subscription (usage-based)"),
    "google_bigquery_dataset":               (0.0, "BigQuery dataset (usage-based)"),
    "google_bigquery_table":                 (0.0, "BigQuery table (usage-based)"),
    "google_monitoring_alert_policy":        (0.0, "Monitoring alert (no direct cost)"),
    "google_logging_metric":                 (0.0, "Logging metric (no direct cost)"),
}

_NO_DIRECT_COST = {
    "google_compute_network", "google_compute_subnetwork", "google_compute_firewall",
    "google_compute_route", "google_compute_router", "google_project_iam_member",
    "google_project_iam_binding", "google_project_iam_policy",
    "google_service_account", "google_service_account_iam_member",
}

_DEFAULT_GCE = 24.46  # e2-medium


def _machine(value: str) -> str:
    # machine_type may be a full self link
    return value.rsplit("/", 1)[-1]


def quote(resource: Resource) -> Optional[Quote]:
    rt = resource.resource_type
    a = resource.attributes

    if rt in _FLAT:
        monthly, description = _FLAT[rt]
        return Quote(monthly, description)
    if rt in _NO_DIRECT_COST:
        return Quote(0.0, "No direct cost")

    # ------------------------------------------------------------ Compute
    if rt == "google_compute_instance":
        machine = _machine(text(a, "machine_type", "e2-medium"))
        price = GCE_PRICING.get(machine)
        if price is None:
            return Quote(_DEFAULT_GCE, f"GCE {machine} (estimated, type not in lookup table)")
        return Quote(price, f"GCE {machine}", unit="hours")

    if rt == "google_compute_instance_template":
        machine = _machine(text(a, "machine_type", "e2-medium"))
        return Quote(0.0, f"Instance template {machine} (cost depends on instance group)")

    if rt in ("google_compute_instance_group_manager", "google_compute_region_instance_group_manager"):
        size = num(a, "target_size", 1)
        return Quote(
            size * _DEFAULT_GCE,
            f"Instance group manager ({size:g} instances, estimated e2-medium)",
            quantity=size,
            unit="instances",
        )

    if rt == "google_compute_disk":
        disk_type = text(a, "type", "pd-balanced")
        size = num(a, "size", 10)
        return Quote(
            size * DISK_PRICING.get(disk_type, 0.10),
            f"Persistent Disk {disk_type} {size:g}GB",
            hourly_cost=0.0,
            quantity=size,
            unit="GB",
        )

    # ------------------------------------------------------------ Database
    if rt == "google_sql_database_instance":
        tier = text(a, "settings.tier", text(a, "tier", "db-n1-standard-1"))
        price = CLOUD_SQL_PRICING.get(tier, 51.10)
        disk_size = num(a, "settings.disk_size", num(a, "disk_size", 10))
        disk_type = text(a, "settings.disk_type", text(a, "disk_type", "PD_SSD"))
        disk = disk_size * (0.09 if disk_type == "PD_HDD" else 0.17)
        ha = "REGIONAL" in (
            text(a, "settings.availability_type", ""),
            text(a, "availability_type", ""),
        )
        compute = price * (2 if ha else 1)
        return Quote(
            compute + disk,
            f"Cloud SQL {tier}{' HA' if ha else ''} + {disk_size:g}GB",
            hourly_cost=compute / HOURS_PER_MONTH,
        )

    if rt == "google_spanner_instance":
        nodes = num(a, "num_nodes", 1)
        return Quote(
            nodes * 0.9 * HOURS_PER_MONTH,
            f"Cloud Spanner ({nodes:g} nodes)",
            hourly_cost=nodes * 0.9,
            quantity=nodes,
            unit="nodes",
        )

    if rt == "google_redis_instance":
        memory_gb = num(a, "memory_size_gb", 1)
        standard = text(a, "tier", "BASIC") == "STANDARD_HA"
        rate = 0.064 if standard else 0.049
        return Quote(
            memory_gb * rate * HOURS_PER_MONTH,
            f"Memorystore Redis {memory_gb:g}GB{' HA' if standard else ''}",
            hourly_cost=memory_gb * rate,
        )

    # ------------------------------------------------------------ Networking
    if rt == "google_compute_router_nat":
        return Quote(
            0.044 * HOURS_PER_MONTH + 32.12,
            "Cloud NAT (fixed + estimated data processing)",
            hourly_cost=0.044,
        )

    # ------------------------------------------------------------ Containers
    if rt == "google_container_cluster":
        mode = "Autopilot" if a.get("enable_autopilot") is True else "Standard"
        return Quote(73.00, f"GKE {mode} cluster management", hourly_cost=0.10)

    if rt == "google_container_node_pool":
        nodes = num(a, "node_count", num(a, "initial_node_count", 1))
        machine = _machine(text(a, "node_config.machine_type", "e2-medium"))
        price = GCE_PRICING.get(machine, _DEFAULT_GCE)
        return Quote(
            price * nodes,
            f"GKE node pool ({nodes:g}x {machine})",
            quantity=nodes,
            unit="nodes",
        )

    return None
