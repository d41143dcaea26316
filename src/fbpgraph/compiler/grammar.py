# Copyright 2026 fbpgraph Contributors
# SPDX-License-Identifier: Apache-2.0

"""Productions of the FBP graph notation.

The grammar only matches and records: captured text is committed as
``TEXT`` records and semantic actions as zero-width action records. The
graph itself is assembled afterwards by replaying those records through
:class:`fbpgraph.compiler.builder.GraphBuilder`.

Summary (``<...>`` captures text, ``{...}`` fires an action)::

    start          <- line* _ !.
    line           <- _ "export=" ... / _ "inport=" <...> {inport}
                    / _ "outport=" <...> {outport} / comment EOL?
                    / _ EOL / _ connection _ LineTerminator?
    LineTerminator <- _ ","? comment? EOL?
    comment        <- _ "#" anychar*
    connection     <- bridge _ "->" _ connection / bridge
    bridge         <- port _ {in_port} node _ port {out_port} {middlet}
                    / iip / leftlet {leftlet} / rightlet {rightlet}
    leftlet        <- node _ portWithIndex / node _ port
    iip            <- "'" <iipchar*> "'" {iip}
    rightlet       <- portWithIndex _ node / port _ node
    node           <- <[a-zA-Z0-9_]+> {node_name} component? {node}
    component      <- "(" <[a-zA-Z/\\-0-9_]*> {component} compMeta? ")"
    compMeta       <- ":" <[a-zA-Z/=_,0-9]+> {metadata}
    port           <- <[A-Z.0-9_]+> __ {port}
    portWithIndex  <- <[A-Z.0-9_]+> {port} "[" <[0-9]+> {port_index} "]" __
"""

import enum

from fbpgraph.parser.engine import (
    Action,
    AnyChar,
    Char,
    CharClass,
    Choice,
    Expression,
    Literal,
    Not,
    OneOrMore,
    Optional,
    Rule,
    Sequence,
    ZeroOrMore,
)

# ###############
# Public Interface
# ###############


class RuleTag(enum.Enum):
    """Tags of every record the FBP grammar can commit."""

    # Productions
    START = "start"
    LINE = "line"
    LINE_TERMINATOR = "LineTerminator"
    COMMENT = "comment"
    CONNECTION = "connection"
    BRIDGE = "bridge"
    LEFTLET = "leftlet"
    IIP = "iip"
    RIGHTLET = "rightlet"
    NODE = "node"
    COMPONENT = "component"
    COMPONENT_META = "compMeta"
    PORT = "port"
    PORT_WITH_INDEX = "portWithIndex"
    ANYCHAR = "anychar"
    IIPCHAR = "iipchar"
    SPACE = "_"
    SEPARATOR = "__"

    # Captured text
    TEXT = "text"

    # Semantic actions
    CREATE_INPORT = "{inport}"
    CREATE_OUTPORT = "{outport}"
    SAVE_IN_PORT = "{in_port}"
    SAVE_OUT_PORT = "{out_port}"
    CREATE_MIDDLET = "{middlet}"
    CREATE_LEFTLET = "{leftlet}"
    CREATE_RIGHTLET = "{rightlet}"
    SET_IIP = "{iip}"
    SET_NODE_NAME = "{node_name}"
    CREATE_NODE = "{node}"
    SET_COMPONENT = "{component}"
    SET_METADATA = "{metadata}"
    SET_PORT = "{port}"
    SET_PORT_INDEX = "{port_index}"

    @property
    def is_action(self) -> bool:
        """Return True for zero-width semantic action tags."""
        return self.value.startswith("{")


def build_grammar() -> Rule:
    """Build the FBP productions and return the start rule."""
    rules = {tag: Rule(tag) for tag in RuleTag if tag is not RuleTag.TEXT and not tag.is_action}
    start = rules[RuleTag.START]
    line = rules[RuleTag.LINE]
    line_terminator = rules[RuleTag.LINE_TERMINATOR]
    comment = rules[RuleTag.COMMENT]
    connection = rules[RuleTag.CONNECTION]
    bridge = rules[RuleTag.BRIDGE]
    leftlet = rules[RuleTag.LEFTLET]
    iip = rules[RuleTag.IIP]
    rightlet = rules[RuleTag.RIGHTLET]
    node = rules[RuleTag.NODE]
    component = rules[RuleTag.COMPONENT]
    comp_meta = rules[RuleTag.COMPONENT_META]
    port = rules[RuleTag.PORT]
    port_with_index = rules[RuleTag.PORT_WITH_INDEX]
    anychar = rules[RuleTag.ANYCHAR]
    iipchar = rules[RuleTag.IIPCHAR]
    _ = rules[RuleTag.SPACE]
    __ = rules[RuleTag.SEPARATOR]

    blank = CharClass(" \t")
    eol = CharClass("\n\r")

    start.define(Sequence(ZeroOrMore(line), _, Not(AnyChar())))
    line.define(
        Choice(
            # Legacy export declaration, accepted and ignored.
            Sequence(
                _,
                Literal("export=", ignore_case=True),
                OneOrMore(CharClass("A-Z", "a-z", "0-9", "._")),
                Char(":"),
                OneOrMore(_EXPORTED_NAME),
                _,
                Optional(line_terminator),
            ),
            _export_line("inport=", RuleTag.CREATE_INPORT, _, line_terminator),
            _export_line("outport=", RuleTag.CREATE_OUTPORT, _, line_terminator),
            Sequence(comment, Optional(eol)),
            Sequence(_, eol),
            Sequence(_, connection, _, Optional(line_terminator)),
        )
    )
    line_terminator.define(Sequence(_, Optional(Char(",")), Optional(comment), Optional(eol)))
    comment.define(Sequence(_, Char("#"), ZeroOrMore(anychar)))
    connection.define(
        Choice(
            Sequence(bridge, _, Literal("->"), _, connection),
            bridge,
        )
    )
    bridge.define(
        Choice(
            Sequence(
                port,
                _,
                Action(RuleTag.SAVE_IN_PORT),
                node,
                _,
                port,
                Action(RuleTag.SAVE_OUT_PORT),
                Action(RuleTag.CREATE_MIDDLET),
            ),
            iip,
            Sequence(leftlet, Action(RuleTag.CREATE_LEFTLET)),
            Sequence(rightlet, Action(RuleTag.CREATE_RIGHTLET)),
        )
    )
    leftlet.define(
        Choice(
            Sequence(node, _, port_with_index),
            Sequence(node, _, port),
        )
    )
    iip.define(
        Sequence(
            Char("'"),
            _capture(ZeroOrMore(iipchar)),
            Char("'"),
            Action(RuleTag.SET_IIP),
        )
    )
    rightlet.define(
        Choice(
            Sequence(port_with_index, _, node),
            Sequence(port, _, node),
        )
    )
    node.define(
        Sequence(
            _capture(OneOrMore(CharClass("a-z", "A-Z", "0-9", "_"))),
            Action(RuleTag.SET_NODE_NAME),
            Optional(component),
            Action(RuleTag.CREATE_NODE),
        )
    )
    component.define(
        Sequence(
            Char("("),
            _capture(ZeroOrMore(CharClass("a-z", "A-Z", "0-9", "_/-"))),
            Action(RuleTag.SET_COMPONENT),
            Optional(comp_meta),
            Char(")"),
        )
    )
    comp_meta.define(
        Sequence(
            Char(":"),
            _capture(OneOrMore(CharClass("a-z", "A-Z", "0-9", "/=_,"))),
            Action(RuleTag.SET_METADATA),
        )
    )
    port.define(
        Sequence(
            _capture(OneOrMore(_PORT_NAME)),
            __,
            Action(RuleTag.SET_PORT),
        )
    )
    port_with_index.define(
        Sequence(
            _capture(OneOrMore(_PORT_NAME)),
            Action(RuleTag.SET_PORT),
            Char("["),
            _capture(OneOrMore(CharClass("0-9"))),
            Action(RuleTag.SET_PORT_INDEX),
            Char("]"),
            __,
        )
    )
    anychar.define(Sequence(Not(eol), AnyChar()))
    iipchar.define(
        Choice(
            Literal("\\'"),
            Sequence(Not(Char("'")), AnyChar()),
        )
    )
    _.define(ZeroOrMore(blank))
    __.define(OneOrMore(blank))
    return start


# ################
# Implementation
# ################

_PORT_NAME = CharClass("A-Z", "0-9", "._")
_EXPORTED_NAME = CharClass("A-Z", "0-9", "_")


def _capture(expression: Expression) -> Rule:
    """Wrap *expression* so its matched text is committed as a TEXT record."""
    return Rule(RuleTag.TEXT, expression)


def _export_line(keyword: str, action: RuleTag, space: Rule, line_terminator: Rule) -> Sequence:
    """Build an ``INPORT=`` / ``OUTPORT=`` header line: ``process.PORT:EXPORTED``."""
    return Sequence(
        space,
        Literal(keyword, ignore_case=True),
        _capture(
            Sequence(
                OneOrMore(CharClass("A-Z", "a-z", "0-9", "_")),
                Char("."),
                OneOrMore(_EXPORTED_NAME),
                Char(":"),
                OneOrMore(_EXPORTED_NAME),
            )
        ),
        space,
        Optional(line_terminator),
        Action(action),
    )


FBP_GRAMMAR = build_grammar()
