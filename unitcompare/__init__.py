"""Unit Compare core package.

This package holds the state and decision logic of a best-price calculator:
product rows typed by the user are validated, converted into prices per unit
and ranked so that the cheapest offer can be highlighted.  The command line
interface and the Streamlit front end shipped with this repository are thin
display layers built on top of it.
"""

from .config import (
    AppConfig,
    DisplayConfig,
    MessagesConfig,
    OutputConfig,
    load_config,
)
from .formatting import describe_result, format_unit_price
from .labels import generate_label
from .parsing import is_numeric_input, to_number
from .pricing import ComputedRow, Summary, SummaryCache, SummaryStatus, compute
from .reporting import export_summary
from .rows import MIN_ROWS, Row, RowSequence, RowStore

__all__ = [
    "AppConfig",
    "ComputedRow",
    "DisplayConfig",
    "MIN_ROWS",
    "MessagesConfig",
    "OutputConfig",
    "Row",
    "RowSequence",
    "RowStore",
    "Summary",
    "SummaryCache",
    "SummaryStatus",
    "compute",
    "describe_result",
    "export_summary",
    "format_unit_price",
    "generate_label",
    "is_numeric_input",
    "load_config",
    "to_number",
]
