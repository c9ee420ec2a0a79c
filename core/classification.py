"""
Summary of Use buckets for booking-type labels.

The rule is a plain case-insensitive substring match against
config.CATEGORY_RULES. A label can fall in more than one bucket
("Bachcare Owner" is both a Bachcare Date and an Owner Date); labels
that match nothing (e.g. "Customer") are left out of the summary.
"""

from typing import Dict, List, Optional, Sequence

from config import CATEGORY_RULES


def categories_for(label: Optional[str], rules: Dict[str, Sequence[str]] = None) -> List[str]:
    """Return the categories `label` belongs to, in rule-table order."""
    if rules is None:
        rules = CATEGORY_RULES
    if not label:
        return []
    label_lower = str(label).lower()
    return [
        category
        for category, keywords in rules.items()
        if any(keyword in label_lower for keyword in keywords)
    ]


def bucket_labels(labels, rules: Dict[str, Sequence[str]] = None) -> Dict[str, List[str]]:
    """
    Group distinct labels by category.

    Every category of the rule table is present, possibly with an empty list.
    Labels keep the order in which they first appear.
    """
    if rules is None:
        rules = CATEGORY_RULES
    buckets: Dict[str, List[str]] = {category: [] for category in rules}
    for label in labels:
        for category in categories_for(label, rules):
            if label not in buckets[category]:
                buckets[category].append(label)
    return buckets
