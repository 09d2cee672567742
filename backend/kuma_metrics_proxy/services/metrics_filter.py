"""Filter Prometheus exposition text down to the monitors of one tag."""
from ..exceptions import UnknownTag
from ..schemas.monitor import TagMap


def _is_meta_line(line: str) -> bool:
    """Comment, HELP/TYPE hint or blank line."""
    return line.startswith("#") or not line.strip()


def filter_metrics(metrics: str, tag: str, tag_map: TagMap) -> str:
    """Drop sample lines that do not belong to a monitor carrying ``tag``.

    Comments and type/help hints are kept even when every sample of the
    metric is dropped. A sample line matches when it contains the literal
    ``monitor_name="<name>",`` label for any monitor in the tag.

    Raises:
        UnknownTag: the tag is not in the map
    """
    service_names = tag_map.get(tag)
    if service_names is None:
        raise UnknownTag(tag)

    labels = [f'monitor_name="{name}",' for name in service_names]
    lines = [
        line for line in metrics.split("\n")
        if _is_meta_line(line) or any(label in line for label in labels)
    ]
    return "\n".join(lines)
