"""
Azure static pricing — approximate pay-as-you-go list prices, East US.
"""
from typing import Optional

from tfscan.models.estimate import HOURS_PER_MONTH, Quote
from tfscan.models.resource import Resource
from tfscan.pricing.common import num, text

VM_PRICING = {
    "Standard_B1ls": 3.80, "Standard_B1s": 7.59, "Standard_B1ms": 15.18,
    "Standard_B2s": 30.37, "Standard_B2ms": 60.74, "Standard_B4ms": 121.47,
    "Standard_B8ms": 242.94,
    "Standard_D2s_v3": 69.35, "Standard_D4s_v3": 138.70, "Standard_D8s_v3": 277.40,
    "Standard_D16s_v3": 554.79,
    "Standard_D2s_v4": 69.35, "Standard_D4s_v4": 138.70, "Standard_D8s_v4": 277.40,
    "Standard_D2s_v5": 69.35, "Standard_D4s_v5": 138.70, "Standard_D8s_v5": 277.40,
    "Standard_D2_v3": 65.70, "Standard_D4_v3": 131.40,
    "Standard_D2_v5": 65.70, "Standard_D4_v5": 131.40,
    "Standard_E2s_v3": 91.98, "Standard_E4s_v3": 183.96, "Standard_E8s_v3": 367.92,
    "Standard_E16s_v3": 735.84,
    "Standard_E2s_v5": 91.98, "Standard_E4s_v5": 183.96, "Standard_E8s_v5": 367.92,
    "Standard_F2s_v2": 60.59, "Standard_F4s_v2": 121.18, "Standard_F8s_v2": 242.36,
    "Standard_F16s_v2": 484.72,
    "Standard_A1_v2": 29.20, "Standard_A2_v2": 61.32, "Standard_A4_v2": 128.48,
}

# per GB-month
DISK_PRICING = {
    "Premium_LRS": 0.132, "StandardSSD_LRS": 0.075, "Standard_LRS": 0.04,
    "UltraSSD_LRS": 0.12, "PremiumV2_LRS": 0.12,
}

SQL_DATABASE_PRICING = {
    "Basic": 4.90, "S0": 14.72, "S1": 29.43, "S2": 73.58, "S3": 147.17,
    "P1": 460.80, "P2": 921.60, "P4": 1843.20,
    "GP_S_Gen5_1": 38.35, "GP_S_Gen5_2": 76.70, "GP_Gen5_2": 307.68,
    "GP_Gen5_4": 615.36, "BC_Gen5_2": 716.80, "BC_Gen5_4": 1433.60,
}

FLEXIBLE_SERVER_PRICING = {
    "B_Standard_B1s": 12.26, "B_Standard_B1ms": 15.33, "B_Standard_B2s": 30.66,
    "GP_Standard_D2s_v3": 101.47, "GP_Standard_D4s_v3": 202.94,
    "GP_Standard_D8s_v3": 405.88,
    "MO_Standard_E2s_v3": 128.11, "MO_Standard_E4s_v3": 256.23,
}

REDIS_PRICING = {
    "C0": 16.06, "C1": 40.15, "C2": 60.22, "C3": 120.45, "C4": 240.90,
    "C5": 481.80, "C6": 963.60,
    "P1": 200.75, "P2": 401.50, "P3": 803.00, "P4": 1606.00,
}

ACR_PRICING = {"Basic": 5.00, "Standard": 20.00, "Premium": 50.00}

_FLAT = {
    "azurerm_storage_account":       (2.08, "Storage Account (estimated 100GB Hot tier)"),
    "azurerm_application_gateway":   (223.38, "Application Gateway v2 (fixed + estimated CU)"),
    "azurerm_nat_gateway":           (65.70, "NAT Gateway (fixed + estimated data processing)"),
    "azurerm_frontdoor":             (35.04, "Azure Front Door (estimated base fee)"),
    "azurerm_cdn_frontdoor_profile": (35.04, "Azure Front Door (estimated base fee)"),
    "azurerm_vpn_gateway":           (138.70, "VPN Gateway (VpnGw1)"),
    "azurerm_express_route_circuit": (29.20, "ExpressRoute (estimated Standard 50Mbps)"),
    "azurerm_cosmosdb_account":      (23.36, "Cosmos DB (estimated 400 RU/s provisioned)"),
    "azurerm_mssql_server":          (0.0, "SQL Server logical server (no direct cost)"),
}

_NO_DIRECT_COST = {
    "azurerm_resource_group", "azurerm_virtual_network", "azurerm_subnet",
    "azurerm_network_security_group", "azurerm_network_security_rule",
    "azurerm_network_interface", "azurerm_route_table",
    "azurerm_role_assignment", "azurerm_user_assigned_identity",
    "azurerm_key_vault", "azurerm_key_vault_secret",
}

_DEFAULT_VM = 69.35  # Standard_D2s_v3

_VM_TYPES = (
    "azurerm_virtual_machine",
    "azurerm_linux_virtual_machine",
    "azurerm_windows_virtual_machine",
)
_VMSS_TYPES = (
    "azurerm_virtual_machine_scale_set",
    "azurerm_linux_virtual_machine_scale_set",
    "azurerm_windows_virtual_machine_scale_set",
)


def quote(resource: Resource) -> Optional[Quote]:
    rt = resource.resource_type
    a = resource.attributes

    if rt in _FLAT:
        monthly, description = _FLAT[rt]
        return Quote(monthly, description)
    if rt in _NO_DIRECT_COST:
        return Quote(0.0, "No direct cost")

    # ------------------------------------------------------------ Compute
    if rt in _VM_TYPES:
        size = text(a, "size", text(a, "vm_size", "Standard_D2s_v3"))
        price = VM_PRICING.get(size)
        if price is None:
            return Quote(_DEFAULT_VM, f"VM {size} (estimated, size not in lookup table)")
        windows = rt == "azurerm_windows_virtual_machine"
        if windows:
            # Windows licence surcharge
            price *= 1.4
        return Quote(price, f"VM {size}{' (Windows)' if windows else ''}", unit="hours")

    if rt in _VMSS_TYPES:
        size = text(a, "sku", text(a, "size", "Standard_D2s_v3"))
        instances = num(a, "instances", 2)
        return Quote(
            VM_PRICING.get(size, _DEFAULT_VM) * instances,
            f"VMSS {size} x{instances:g}",
            quantity=instances,
            unit="instances",
        )

    if rt == "azurerm_container_group":
        cpu = num(a, "container.cpu", num(a, "cpu", 1))
        memory = num(a, "container.memory", num(a, "memory", 1.5))
        hourly = cpu * 0.0000125 * 3600 + memory * 0.0000014 * 3600
        return Quote(
            hourly * HOURS_PER_MONTH,
            f"Container instance ({cpu:g} vCPU, {memory:g}GB)",
            hourly_cost=hourly,
        )

    # ------------------------------------------------------------ Database
    if rt == "azurerm_mssql_database":
        sku = text(a, "sku_name", "S0")
        return Quote(SQL_DATABASE_PRICING.get(sku, 14.72), f"Azure SQL Database {sku}")

    if rt in ("azurerm_mysql_flexible_server", "azurerm_postgresql_flexible_server"):
        sku = text(a, "sku_name", "B_Standard_B1ms")
        engine = "MySQL" if "mysql" in rt else "PostgreSQL"
        price = FLEXIBLE_SERVER_PRICING.get(sku, 15.33)
        storage_mb = num(a, "storage_mb", 0)
        storage_gb = storage_mb / 1024 if storage_mb else 32
        return Quote(
            price + storage_gb * 0.115,
            f"{engine} Flexible Server {sku} + {storage_gb:g}GB",
            hourly_cost=price / HOURS_PER_MONTH,
        )

    if rt == "azurerm_redis_cache":
        family = text(a, "family", "C")
        capacity = num(a, "capacity", 0)
        key = f"{family}{capacity:g}"
        return Quote(REDIS_PRICING.get(key, 16.06), f"Azure Cache for Redis {key}")

    # ------------------------------------------------------------ Storage
    if rt == "azurerm_managed_disk":
        storage_type = text(a, "storage_account_type", "Standard_LRS")
        size = num(a, "disk_size_gb", 32)
        return Quote(
            size * DISK_PRICING.get(storage_type, 0.04),
            f"Managed Disk {storage_type} {size:g}GB",
            hourly_cost=0.0,
            quantity=size,
            unit="GB",
        )

    # ------------------------------------------------------------ Networking
    if rt in ("azurerm_lb", "azurerm_lb_rule"):
        if text(a, "sku", "Standard") == "Basic":
            return Quote(0.0, "Load Balancer Basic (free)")
        return Quote(25.55, "Load Balancer Standard (fixed + estimated rules)", hourly_cost=0.025)

    if rt == "azurerm_public_ip":
        if text(a, "sku", "Standard") == "Basic":
            return Quote(0.0, "Public IP Basic (free when associated)")
        return Quote(3.65, "Public IP Standard", hourly_cost=0.005)

    # ------------------------------------------------------------ Containers
    if rt == "azurerm_kubernetes_cluster":
        tier = text(a, "sku_tier", "Free")
        control_plane = 73.00 if tier == "Standard" else 0.0
        vm_size = text(a, "default_node_pool.vm_size", "Standard_D2s_v3")
        nodes = num(a, "default_node_pool.node_count", 0)
        monthly = control_plane + VM_PRICING.get(vm_size, _DEFAULT_VM) * nodes
        description = f"AKS cluster ({tier} tier)"
        if nodes:
            description += f" + default pool {vm_size} x{nodes:g}"
        return Quote(monthly, description)

    if rt == "azurerm_kubernetes_cluster_node_pool":
        vm_size = text(a, "vm_size", "Standard_D2s_v3")
        nodes = num(a, "node_count", num(a, "min_count", 1))
        return Quote(
            VM_PRICING.get(vm_size, _DEFAULT_VM) * nodes,
            f"AKS node pool {vm_size} x{nodes:g}",
            quantity=nodes,
            unit="nodes",
        )

    if rt == "azurerm_container_registry":
        sku = text(a, "sku", "Basic")
        return Quote(ACR_PRICING.get(sku, 5.00), f"Container Registry {sku}", hourly_cost=0.0)

    return None
