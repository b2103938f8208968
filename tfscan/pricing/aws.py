"""
AWS static pricing — approximate on-demand list prices, us-east-1, Linux.
"""
from typing import Optional

from tfscan.models.estimate import HOURS_PER_MONTH, Quote
from tfscan.models.resource import Resource
from tfscan.pricing.common import num, text

EC2_PRICING = {
    # T2 burstable
    "t2.nano": 4.18, "t2.micro": 8.35, "t2.small": 16.79, "t2.medium": 33.41,
    "t2.large": 66.82, "t2.xlarge": 133.63, "t2.2xlarge": 267.26,
    # T3 burstable
    "t3.nano": 3.80, "t3.micro": 7.59, "t3.small": 15.18, "t3.medium": 30.37,
    "t3.large": 60.74, "t3.xlarge": 121.47, "t3.2xlarge": 242.94,
    # T3a (AMD)
    "t3a.nano": 3.43, "t3a.micro": 6.86, "t3a.small": 13.72, "t3a.medium": 27.45,
    "t3a.large": 54.90, "t3a.xlarge": 109.79,
    # General purpose
    "m5.large": 69.12, "m5.xlarge": 138.24, "m5.2xlarge": 276.48, "m5.4xlarge": 552.96,
    "m6i.large": 69.12, "m6i.xlarge": 138.24, "m6i.2xlarge": 276.48, "m6i.4xlarge": 552.96,
    "m7i.large": 72.56, "m7i.xlarge": 145.12, "m7i.2xlarge": 290.24,
    # Compute optimized
    "c5.large": 61.20, "c5.xlarge": 122.40, "c5.2xlarge": 244.80, "c5.4xlarge": 489.60,
    "c6i.large": 61.20, "c6i.xlarge": 122.40, "c6i.2xlarge": 244.80,
    # Memory optimized
    "r5.large": 90.72, "r5.xlarge": 181.44, "r5.2xlarge": 362.88, "r5.4xlarge": 725.76,
    "r6i.large": 90.72, "r6i.xlarge": 181.44, "r6i.2xlarge": 362.88,
    # GPU
    "p3.2xlarge": 2208.60, "p3.8xlarge": 8834.40,
    "g4dn.xlarge": 379.58, "g4dn.2xlarge": 543.12,
}

RDS_PRICING = {
    "db.t3.micro": 12.41, "db.t3.small": 24.82, "db.t3.medium": 49.64,
    "db.t3.large": 99.28, "db.t3.xlarge": 198.56,
    "db.t4g.micro": 11.83, "db.t4g.small": 23.65, "db.t4g.medium": 47.30,
    "db.m5.large": 124.10, "db.m5.xlarge": 248.20, "db.m5.2xlarge": 496.40,
    "db.m6i.large": 124.10, "db.m6i.xlarge": 248.20,
    "db.r5.large": 172.80, "db.r5.xlarge": 345.60, "db.r5.2xlarge": 691.20,
    "db.r6i.large": 172.80, "db.r6i.xlarge": 345.60,
}

# per GB-month
EBS_PRICING = {
    "gp2": 0.10, "gp3": 0.08, "io1": 0.125, "io2": 0.125,
    "st1": 0.045, "sc1": 0.015, "standard": 0.05,
}

ELASTICACHE_PRICING = {
    "cache.t3.micro": 12.24, "cache.t3.small": 24.48, "cache.t3.medium": 49.06,
    "cache.t4g.micro": 11.52, "cache.t4g.small": 23.04, "cache.t4g.medium": 46.08,
    "cache.m5.large": 124.10, "cache.m5.xlarge": 248.20,
    "cache.r5.large": 163.52, "cache.r5.xlarge": 327.04,
}

# Types that are billed as a flat monthly amount regardless of attributes.
_FLAT = {
    "aws_rds_cluster":             (210.24, "Aurora cluster (estimated writer instance)"),
    "aws_s3_bucket":               (2.30, "S3 Standard (estimated 100GB baseline)"),
    "aws_efs_file_system":         (15.00, "EFS Standard (estimated 50GB)"),
    "aws_eip":                     (3.65, "Elastic IP (cost if unattached)"),
    "aws_cloudfront_distribution": (10.00, "CloudFront (estimated baseline, usage-based)"),
    "aws_eks_cluster":             (73.00, "EKS cluster control plane"),
    "aws_ecr_repository":          (1.00, "ECR repository (estimated 10GB images)"),
    "aws_cloudwatch_metric_alarm": (0.10, "CloudWatch alarm"),
    "aws_vpn_gateway":             (36.50, "VPN Gateway"),
    "aws_lambda_function":         (0.0, "Lambda (usage-based, $0 at rest)"),
    "aws_api_gateway_rest_api":    (0.0, "API Gateway (usage-based, $0 at rest)"),
    "aws_apigatewayv2_api":        (0.0, "API Gateway (usage-based, $0 at rest)"),
    "aws_sqs_queue":               (0.0, "SQS queue (usage-based, first 1M requests free)"),
    "aws_sns_topic":               (0.0, "SNS topic (usage-based)"),
    "aws_cloudwatch_log_group":    (0.0, "CloudWatch Logs (ingestion/storage usage-based)"),
    "aws_ecs_cluster":             (0.0, "ECS cluster (no direct cost, tasks billed separately)"),
    "aws_ecs_service":             (0.0, "ECS service (cost depends on launch type and resources)"),
    "aws_ecs_task_definition":     (0.0, "ECS task (cost depends on launch type and resources)"),
    "aws_lb_target_group":         (0.0, "Target group (no direct cost)"),
    "aws_alb_target_group":        (0.0, "Target group (no direct cost)"),
    "aws_customer_gateway":        (0.0, "Customer gateway (no direct cost)"),
}

_NO_DIRECT_COST = {
    "aws_vpc", "aws_subnet", "aws_route_table", "aws_route_table_association",
    "aws_route", "aws_internet_gateway", "aws_security_group",
    "aws_security_group_rule", "aws_network_acl", "aws_iam_role",
    "aws_iam_policy", "aws_iam_policy_attachment",
    "aws_iam_role_policy_attachment", "aws_iam_instance_profile",
    "aws_iam_user", "aws_iam_group", "aws_kms_key", "aws_kms_alias",
    "aws_ssm_parameter", "aws_secretsmanager_secret", "aws_acm_certificate",
    "aws_route53_zone", "aws_route53_record", "aws_waf_web_acl",
    "aws_wafv2_web_acl",
}

_DEFAULT_EC2 = 30.37  # t3.medium


def quote(resource: Resource) -> Optional[Quote]:
    """Monthly price for an aws_* resource, or None when the type is unknown."""
    rt = resource.resource_type
    a = resource.attributes

    if rt in _FLAT:
        monthly, description = _FLAT[rt]
        return Quote(monthly, description)
    if rt in _NO_DIRECT_COST:
        return Quote(0.0, "No direct cost")

    # ------------------------------------------------------------ Compute
    if rt == "aws_instance":
        instance_type = text(a, "instance_type", "t3.medium")
        price = EC2_PRICING.get(instance_type)
        if price is None:
            return Quote(_DEFAULT_EC2, f"EC2 {instance_type} (estimated, type not in lookup table)")
        volume_size = num(a, "root_block_device.volume_size", 0)
        volume_type = text(a, "root_block_device.volume_type", "gp3")
        storage = volume_size * EBS_PRICING.get(volume_type, 0.08)
        description = f"EC2 {instance_type}"
        if volume_size:
            description += f" + {volume_size:g}GB {volume_type} root volume"
        return Quote(price + storage, description, hourly_cost=price / HOURS_PER_MONTH, unit="hours")

    if rt in ("aws_launch_template", "aws_launch_configuration"):
        instance_type = text(a, "instance_type", "t3.medium")
        return Quote(0.0, f"Launch template {instance_type} (cost depends on ASG)")

    if rt == "aws_autoscaling_group":
        min_size = num(a, "min_size", 1)
        max_size = num(a, "max_size", min_size)
        desired = num(a, "desired_capacity", min_size)
        return Quote(
            desired * _DEFAULT_EC2,
            f"ASG ({min_size:g}-{max_size:g}, desired {desired:g}) estimated at t3.medium",
            quantity=desired,
            unit="instances",
        )

    # ------------------------------------------------------------ Database
    if rt == "aws_db_instance":
        instance_class = text(a, "instance_class", "db.t3.medium")
        price = RDS_PRICING.get(instance_class, 49.64)
        storage_gb = num(a, "allocated_storage", 20)
        storage_type = text(a, "storage_type", "gp2")
        storage = storage_gb * EBS_PRICING.get(storage_type, 0.115)
        multi_az = a.get("multi_az") is True
        compute = price * (2 if multi_az else 1)
        return Quote(
            compute + storage,
            f"RDS {instance_class}{' Multi-AZ' if multi_az else ''} + {storage_gb:g}GB {storage_type}",
            hourly_cost=compute / HOURS_PER_MONTH,
        )

    if rt == "aws_rds_cluster_instance":
        instance_class = text(a, "instance_class", "db.r5.large")
        return Quote(RDS_PRICING.get(instance_class, 172.80), f"Aurora instance {instance_class}")

    if rt == "aws_dynamodb_table":
        if text(a, "billing_mode", "PROVISIONED") == "PAY_PER_REQUEST":
            return Quote(0.0, "DynamoDB on-demand (usage-based)")
        rcu = num(a, "read_capacity", 5)
        wcu = num(a, "write_capacity", 5)
        monthly = rcu * 0.00013 * HOURS_PER_MONTH + wcu * 0.00065 * HOURS_PER_MONTH
        return Quote(monthly, f"DynamoDB provisioned ({rcu:g} RCU, {wcu:g} WCU)")

    if rt == "aws_redshift_cluster":
        node_type = text(a, "node_type", "dc2.large")
        nodes = num(a, "number_of_nodes", 1)
        return Quote(182.50 * nodes, f"Redshift {node_type} x{nodes:g}", quantity=nodes, unit="nodes")

    if rt in ("aws_elasticsearch_domain", "aws_opensearch_domain"):
        instance_type = text(a, "cluster_config.instance_type", "t3.small.search")
        return Quote(26.28, f"OpenSearch {instance_type} (estimated)", hourly_cost=0.036)

    # ------------------------------------------------------------ Storage
    if rt == "aws_ebs_volume":
        volume_type = text(a, "type", "gp3")
        size = num(a, "size", 20)
        iops = num(a, "iops", 0)
        iops_cost = iops * 0.065 if volume_type in ("io1", "io2") else 0.0
        description = f"EBS {volume_type} {size:g}GB"
        if iops:
            description += f" {iops:g} IOPS"
        return Quote(
            size * EBS_PRICING.get(volume_type, 0.08) + iops_cost,
            description,
            hourly_cost=0.0,
            quantity=size,
            unit="GB",
        )

    # ------------------------------------------------------------ Networking
    if rt in ("aws_lb", "aws_alb"):
        return Quote(0.0225 * HOURS_PER_MONTH + 5.84, "Load Balancer (fixed + estimated LCU)", hourly_cost=0.0225)

    if rt == "aws_nat_gateway":
        return Quote(
            0.045 * HOURS_PER_MONTH + 32.85,
            "NAT Gateway (fixed + estimated data processing)",
            hourly_cost=0.045,
        )

    # ------------------------------------------------------------ Caching / streaming
    if rt == "aws_elasticache_cluster":
        node_type = text(a, "node_type", "cache.t3.medium")
        nodes = num(a, "num_cache_nodes", 1)
        price = ELASTICACHE_PRICING.get(node_type, 49.06)
        return Quote(price * nodes, f"ElastiCache {node_type} x{nodes:g}", quantity=nodes, unit="nodes")

    if rt == "aws_elasticache_replication_group":
        node_type = text(a, "node_type", "cache.t3.medium")
        nodes = num(a, "num_cache_clusters", num(a, "number_cache_clusters", 2))
        price = ELASTICACHE_PRICING.get(node_type, 49.06)
        return Quote(
            price * nodes,
            f"ElastiCache replication group {node_type} x{nodes:g}",
            quantity=nodes,
            unit="nodes",
        )

    if rt == "aws_kinesis_stream":
        shards = num(a, "shard_count", 1)
        return Quote(shards * 10.95, f"Kinesis stream ({shards:g} shards)", quantity=shards, unit="shards")

    return None
