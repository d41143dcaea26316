# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""FBP grammar, graph builder, parse entry point and graph artifacts."""

from fbpgraph.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from fbpgraph.compiler.builder import GraphBuilder
from fbpgraph.compiler.grammar import FBP_GRAMMAR, RuleTag, build_grammar
from fbpgraph.compiler.parser import FbpParser, parse
from fbpgraph.parser.diagnostics import Diagnostic, ParseError

__all__ = [
    "parse",
    "FbpParser",
    "ParseError",
    "Diagnostic",
    "GraphBuilder",
    "RuleTag",
    "FBP_GRAMMAR",
    "build_grammar",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
]
