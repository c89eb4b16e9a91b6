"""
Online first-fit cluster assignment.

A record joins the first cluster (oldest first) whose centre is similar
enough on title OR transcript. Later clusters are never considered once a
match is found, even if they would score higher. A record that matches
nothing founds a new cluster and becomes its centre.
"""
from typing import AbstractSet, List, Tuple

from core.entities import Centre, Cluster, Record
from processing.similarity import extract_tokens, jaccard_similarity

SIMILARITY_THRESHOLD = 0.2


def matches(
    centre: Centre,
    title_set: AbstractSet[str],
    transcript_set: AbstractSet[str],
) -> bool:
    if jaccard_similarity(title_set, centre.title_set) >= SIMILARITY_THRESHOLD:
        return True
    return jaccard_similarity(transcript_set, centre.transcript_set) >= SIMILARITY_THRESHOLD


def assign(clusters: List[Cluster], record: Record) -> Tuple[int, bool]:
    """
    Place `record` into `clusters`, mutating the list in place.

    Returns (cluster_key, created). The caller must hold exclusive access
    to `clusters` for the whole call.
    """
    title_set = extract_tokens(record.title)
    transcript_set = extract_tokens(record.transcript)

    for cluster in clusters:
        if matches(cluster.centre, title_set, transcript_set):
            cluster.members.append(record)
            return cluster.key, False

    cluster = Cluster(
        centre=Centre(title_set=title_set, transcript_set=transcript_set, num=record.num),
        members=[record],
    )
    clusters.append(cluster)
    return cluster.key, True
