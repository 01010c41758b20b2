"""Topic registry - the closed set of subtopics that partition the question bank.

The registry, not the question set, defines the domain for topic weighting:
every registered topic gets a weight even if no question or attempt uses it.
"""

SUBTOPICS: dict[str, str] = {
    "cloud_computing": "Cloud Computing",
    "iam": "IAM",
    "ec2": "EC2",
    "ec2_storage": "EC2 Storage",
    "elb_asg": "ELB & ASG",
    "s3": "S3",
    "databases": "Databases",
    "other_compute": "Other Compute",
    "deploying": "Deploying",
    "global_infrastructure": "Global Infrastructure",
    "cloud_integration": "Cloud Integration",
    "cloud_monitoring": "Cloud Monitoring",
    "vpc": "VPC",
    "security_compliance": "Security & Compliance",
    "machine_learning": "Machine Learning",
    "account_billing": "Account & Billing",
    "advanced_identity": "Advanced Identity",
    "other_services": "Other Services",
    "architecting_ecosystem": "Architecting & Ecosystem",
}


def topic_ids() -> tuple[str, ...]:
    """Registered topic ids in registry order."""
    return tuple(SUBTOPICS)


def is_known_topic(topic_id: str) -> bool:
    return topic_id in SUBTOPICS


def get_topic_display_name(topic_id: str) -> str:
    """
    Human-readable name for a topic.

    Unknown ids are title-cased with underscores turned into spaces,
    e.g. "route_53" -> "Route 53".
    """
    if topic_id in SUBTOPICS:
        return SUBTOPICS[topic_id]
    return " ".join(word[:1].upper() + word[1:] for word in topic_id.split("_") if word)


def all_topics() -> list[dict[str, str]]:
    """List of {id, display_name} dicts in registry order."""
    return [{"id": topic_id, "display_name": name} for topic_id, name in SUBTOPICS.items()]
