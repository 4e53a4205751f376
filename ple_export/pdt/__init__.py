"""PDT 710 (annual income tax return) importation extracts.

Submodules
----------
fields
    Counterparty field records and the row builder.
collector
    UIT threshold consolidation.
trial
    Trial balance line converter.
"""

from ple_export.pdt.collector import FieldCollector, uit_limit
from ple_export.pdt.fields import (
    FieldRecord,
    FieldRecordBuilder,
    is_legal_entity,
    parse_doc_type,
    split_person_name,
)
from ple_export.pdt.trial import trial_line

__all__ = [
    "FieldCollector",
    "FieldRecord",
    "FieldRecordBuilder",
    "is_legal_entity",
    "parse_doc_type",
    "split_person_name",
    "trial_line",
    "uit_limit",
]
