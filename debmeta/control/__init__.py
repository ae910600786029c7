# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""debian/control file parsing.

Modules:
    paragraph
        RFC 2822-style paragraph splitting and writing with
        case-insensitive fields.
    schema
        FieldSpec, decode_paragraph() and encode_record() for declarative
        records.
    records
        SourceParagraph, BinaryParagraph and Control.
    dsc
        DSC records for (optionally clearsigned) .dsc files.
    index
        SourceIndex and BinaryIndex stanzas of archive Sources and
        Packages files.
"""

from .dsc import DSC, parse_dsc
from .index import BinaryIndex, SourceIndex, parse_binary_index, parse_source_index
from .paragraph import (
    Paragraph,
    format_paragraph,
    format_paragraphs,
    parse_paragraphs,
)
from .records import (
    BinaryParagraph,
    Control,
    SourceParagraph,
    load_control,
    parse_control,
)
from .schema import FieldSpec, decode_paragraph, encode_record, field_schema

__all__ = [
    "DSC",
    "BinaryIndex",
    "BinaryParagraph",
    "Control",
    "FieldSpec",
    "Paragraph",
    "SourceIndex",
    "SourceParagraph",
    "decode_paragraph",
    "encode_record",
    "field_schema",
    "format_paragraph",
    "format_paragraphs",
    "load_control",
    "parse_binary_index",
    "parse_control",
    "parse_dsc",
    "parse_paragraphs",
    "parse_source_index",
]
