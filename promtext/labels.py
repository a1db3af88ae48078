"""Label escaping and composition for sample lines"""
from typing import Iterable, List, Mapping, Sequence, Tuple, Union

from .models import MetricDescriptor

LabelPair = Tuple[str, str]
LabelsArg = Union[Mapping[str, str], Iterable[LabelPair], None]

_LABEL_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}
_HELP_ESCAPES = {"\\": "\\\\", "\n": "\\n"}


def escape_label_value(value: str) -> str:
    """Escape a label value for embedding between double quotes.
    
    Backslash, double quote and newline are replaced in a single pass over
    the original string, so existing escape sequences are escaped again
    rather than preserved.
    """
    return "".join(_LABEL_ESCAPES.get(ch, ch) for ch in value)


def escape_help(text: str) -> str:
    """Escape HELP text (backslash and newline only)"""
    return "".join(_HELP_ESCAPES.get(ch, ch) for ch in text)


def normalize_labels(labels: LabelsArg) -> Tuple[LabelPair, ...]:
    """Turn a mapping or iterable of pairs into an ordered tuple of pairs"""
    if labels is None:
        return ()
    if isinstance(labels, Mapping):
        labels = labels.items()
    return tuple((str(key), str(value)) for key, value in labels)


def compose_labels(current: Sequence[LabelPair], common: Sequence[LabelPair],
                   descriptor: MetricDescriptor) -> List[LabelPair]:
    """Concatenate call-scoped, common and static labels in that order.
    
    Keys repeated across levels are kept; avoiding collisions is up to the caller.
    """
    return [*current, *common, *descriptor.labels]


def render_labels(labels: Sequence[LabelPair]) -> str:
    """Render ``{k="v",...}``, or an empty string when there are no labels"""
    if not labels:
        return ""
    pairs = [f'{key}="{escape_label_value(value)}"' for key, value in labels]
    return "{" + ",".join(pairs) + "}"


def sample_key(metric_name: str, labels: Sequence[LabelPair]) -> str:
    """Build the key identifying a sample within its family"""
    return metric_name + render_labels(labels)
