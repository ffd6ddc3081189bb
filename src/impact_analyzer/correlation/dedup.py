"""Merge pass for cross-repository impacts."""

from collections.abc import Iterable

from impact_analyzer.models.relations import CrossRepoImpact


def dedupe(records: Iterable[CrossRepoImpact]) -> list[CrossRepoImpact]:
    """
    Collapse records sharing (source_repo, source_component, target_repo, relation).

    The first record for a key is kept in place; target components of
    later records with the same key are unioned into it. Output order is
    the first-seen order of distinct keys.

    Args:
        records: Raw records in correlation order.

    Returns:
        One record per distinct key.
    """
    merged: dict[tuple[str, str, str, str], CrossRepoImpact] = {}

    for record in records:
        existing = merged.get(record.key)
        if existing is None:
            merged[record.key] = record.model_copy(
                update={"target_components": tuple(dict.fromkeys(record.target_components))}
            )
            continue

        union = tuple(dict.fromkeys((*existing.target_components, *record.target_components)))
        if union != existing.target_components:
            merged[record.key] = existing.model_copy(update={"target_components": union})

    return list(merged.values())
