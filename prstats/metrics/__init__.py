from prstats.metrics.plugins.count_by_author import CountByAuthor
from prstats.metrics.plugins.time_to_merge import TimeToMerge

def get_metrics():
    return {
        'count_by_author': CountByAuthor,
        'time_to_merge': TimeToMerge,
    }
