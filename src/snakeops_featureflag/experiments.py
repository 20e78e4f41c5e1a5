"""Weighted experiment variant assignment"""

from __future__ import annotations

from snakeops_hashing import weighted_bucket

from .models import Experiment, FlagVariant


def assign_variant(experiment: Experiment, identity: str) -> FlagVariant | None:
    """Pick a variant for ``identity`` by cumulative weight.

    The draw is salted with the experiment id so that assignments across
    experiments are independent. Returns None when no variant carries weight.
    """
    total = experiment.total_weight
    if total <= 0:
        return None
    selection = weighted_bucket(identity, experiment.id, total)
    cumulative = 0
    for variant in experiment.variants:
        if variant.weight <= 0:
            continue
        cumulative += variant.weight
        if selection < cumulative:
            return variant
    return None
