# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Backtracking match engine, record log, tree reconstruction and diagnostics."""

from fbpgraph.parser.diagnostics import Diagnostic, ParseError, diagnose, line_column
from fbpgraph.parser.engine import (
    END_SYMBOL,
    Action,
    AnyChar,
    Char,
    CharClass,
    Checkpoint,
    Choice,
    Cursor,
    Expression,
    Literal,
    Not,
    OneOrMore,
    Optional,
    Rule,
    Sequence,
    ZeroOrMore,
)
from fbpgraph.parser.records import DEFAULT_CAPACITY, MatchRecord, MatchRecordStore
from fbpgraph.parser.tree import ParseNode, build_tree, order

__all__ = [
    # Engine
    "END_SYMBOL",
    "Cursor",
    "Checkpoint",
    "Expression",
    "Char",
    "Literal",
    "CharClass",
    "AnyChar",
    "Sequence",
    "Choice",
    "ZeroOrMore",
    "OneOrMore",
    "Optional",
    "Not",
    "Rule",
    "Action",
    # Records
    "DEFAULT_CAPACITY",
    "MatchRecord",
    "MatchRecordStore",
    # Tree
    "ParseNode",
    "build_tree",
    "order",
    # Diagnostics
    "Diagnostic",
    "ParseError",
    "diagnose",
    "line_column",
]
