"""Decide which search applies to a node, from its kind and its parent's kind.

The tables below are the whole policy. Supporting a new syntactic context
means adding a row.
"""

from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node


class Strategy(str, Enum):
    FUNCTION_DEFINITION = "function_definition"
    FUNCTION_REFERENCE = "function_reference"
    VARIABLE_DEFINITION = "variable_definition"


@dataclass(frozen=True)
class Rule:
    parent_kind: str
    strategy: Strategy
    # None matches any node kind.
    node_kind: str | None = None
    # When set, the node must be the parent's child under this field name.
    parent_field: str | None = None

    def applies(self, node: Node, parent: Node) -> bool:
        if parent.type != self.parent_kind:
            return False
        if self.node_kind is not None and node.type != self.node_kind:
            return False
        if self.parent_field is not None:
            child = parent.child_by_field_name(self.parent_field)
            if child is None or child.id != node.id:
                return False
        return True


_VARIABLE_PARENTS = (
    "argument_list",
    "field_expression",
    "binary_expression",
    "assignment_expression",
    "return_statement",
    "init_declarator",
    "subscript_expression",
    "parenthesized_expression",
    "unary_expression",
    "update_expression",
    "conditional_expression",
    "expression_statement",
)

DEFINITION_RULES: tuple[Rule, ...] = (
    Rule("call_expression", Strategy.FUNCTION_DEFINITION, parent_field="function"),
    *(Rule(kind, Strategy.VARIABLE_DEFINITION, node_kind="identifier") for kind in _VARIABLE_PARENTS),
)

REFERENCE_RULES: tuple[Rule, ...] = (
    Rule("function_declarator", Strategy.FUNCTION_REFERENCE, parent_field="declarator"),
    Rule("call_expression", Strategy.FUNCTION_REFERENCE, node_kind="identifier", parent_field="function"),
)


def classify(node: Node, rules: tuple[Rule, ...]) -> Strategy | None:
    parent = node.parent
    if parent is None:
        return None
    for rule in rules:
        if rule.applies(node, parent):
            return rule.strategy
    return None
