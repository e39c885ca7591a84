import logging

logger = logging.getLogger(__name__)


def select_shortlist(job, ranked_applications):
    """
    Take the first ``job.shortlist_size`` entries of an already ranked list
    (see ``ranking.rank_by_score``). Returns every entry when there are fewer.
    """
    size = job.shortlist_size
    if size is None or size <= 0:
        raise ValueError(f"shortlist_size must be a positive integer, got {size!r}")

    shortlist = list(ranked_applications)[:size]
    logger.debug("Shortlist for job %s: %d of %d slots filled", job.id, len(shortlist), size)
    return shortlist
