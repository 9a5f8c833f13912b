"""
TINY Syntax Tree Definitions
============================

This module defines the syntax tree built by the TINY parser and handed
to later compiler stages.

Node Categories
---------------
SyntaxNode
├── Program - root; declarations in slot 0, statements in slot 1
├── Statements (StatementKind)
│   ├── DECLARATION - type keyword in 'op', varlist in slot 1
│   ├── ASSIGN, READ - target name in 'name'
│   ├── WRITE
│   ├── IF, ELSE
│   ├── REPEAT, WHILE
│   ├── FOR, TO_BOUND, DOWNTO_BOUND
│   └── SWITCH, CASE, DEFAULT
└── Expressions (ExpressionKind)
    ├── BINARY_OP - operator token type in 'op'
    ├── CONSTANT - integer in 'value'
    ├── IDENTIFIER - name in 'name'
    └── STRING_LITERAL - text in 'name'

Tree Shape
----------
Every node has three child slots and a sibling link. The slots keep the
classic TINY layout that downstream stages index into, and the sibling
link carries three different relations:

- sequencing: a statement's sibling is the next statement;
- branch threading: an If with an else part has its Else node as
  sibling, and the statement after the If follows the Else;
- case chains: a Case's sibling is the next Case or the trailing Default.

Declared names are not sibling-linked: a varlist 'a, b, c' is the chain
Id(a) -> slot 0 -> Id(b) -> slot 0 -> Id(c).

Named properties (condition, body, else_branch, next_case, ...) expose
each relation under its own name, so consumers never need to remember
which slot or link holds what.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Union

from tinyc.errors import SourceLocation
from tinyc.frontend.lexer import SYMBOLS, TokenType


MAX_CHILDREN = 3


# =============================================================================
# Node Kinds
# =============================================================================

class NodeKind(Enum):
    """Top-level category of a syntax node."""
    PROGRAM = auto()
    STATEMENT = auto()
    EXPRESSION = auto()


class StatementKind(Enum):
    """Kinds of statement-level nodes."""
    DECLARATION = auto()
    ASSIGN = auto()
    READ = auto()
    WRITE = auto()
    IF = auto()
    ELSE = auto()
    REPEAT = auto()
    WHILE = auto()
    FOR = auto()
    TO_BOUND = auto()
    DOWNTO_BOUND = auto()
    SWITCH = auto()
    CASE = auto()
    DEFAULT = auto()


class ExpressionKind(Enum):
    """Kinds of expression nodes."""
    BINARY_OP = auto()
    CONSTANT = auto()
    IDENTIFIER = auto()
    STRING_LITERAL = auto()


Kind = Union[StatementKind, ExpressionKind, None]


# =============================================================================
# Syntax Node
# =============================================================================

@dataclass
class SyntaxNode:
    """
    A node of the TINY syntax tree.

    Attributes:
        node_kind: Program, statement or expression
        kind: The StatementKind or ExpressionKind (None for the Program)
        location: Source location of the node's leading token
        children: Exactly MAX_CHILDREN slots; meaning depends on kind
        sibling: Next node in a sequence, threaded Else, or next Case
        op: Operator token type (BinaryOp) or type keyword (Declaration)
        value: Integer value (Constant)
        name: Identifier or string text (Identifier, StringLiteral,
              Assign, Read)
    """
    node_kind: NodeKind
    kind: Kind = None
    location: Optional[SourceLocation] = None
    children: list[Optional["SyntaxNode"]] = field(
        default_factory=lambda: [None] * MAX_CHILDREN
    )
    sibling: Optional["SyntaxNode"] = None
    op: Optional[TokenType] = None
    value: Optional[int] = None
    name: Optional[str] = None

    def __repr__(self) -> str:
        label = self.kind.name if self.kind is not None else self.node_kind.name
        if self.location is None:
            return f"SyntaxNode({label})"
        return f"SyntaxNode({label}@{self.location.line}:{self.location.column})"

    @property
    def lineno(self) -> int:
        """Source line of the node's leading token (0 if unknown)."""
        return self.location.line if self.location else 0

    def is_statement(self, *kinds: StatementKind) -> bool:
        """True for a statement node, optionally of one of the given kinds."""
        if self.node_kind != NodeKind.STATEMENT:
            return False
        return not kinds or self.kind in kinds

    def is_expression(self, *kinds: ExpressionKind) -> bool:
        """True for an expression node, optionally of one of the given kinds."""
        if self.node_kind != NodeKind.EXPRESSION:
            return False
        return not kinds or self.kind in kinds

    # =========================================================================
    # Named Relations
    # =========================================================================

    @property
    def declarations(self) -> Optional["SyntaxNode"]:
        """Program: head of the declaration chain."""
        return self.children[0]

    @property
    def statements(self) -> Optional["SyntaxNode"]:
        """Program: head of the statement sequence."""
        return self.children[1]

    @property
    def condition(self) -> Optional["SyntaxNode"]:
        """If: the test. Repeat and While: the test following the body."""
        if self.kind == StatementKind.IF:
            return self.children[0]
        if self.kind in (StatementKind.REPEAT, StatementKind.WHILE):
            return self.children[1]
        return None

    @property
    def then_part(self) -> Optional["SyntaxNode"]:
        """If: head of the then-sequence."""
        if self.kind == StatementKind.IF:
            return self.children[1]
        return None

    @property
    def else_branch(self) -> Optional["SyntaxNode"]:
        """If: the threaded Else node, or None without an else part."""
        if self.kind == StatementKind.IF and self.sibling is not None:
            if self.sibling.kind == StatementKind.ELSE:
                return self.sibling
        return None

    @property
    def body(self) -> Optional["SyntaxNode"]:
        """Head of the nested sequence of a loop, Case, Default or Else."""
        if self.kind in (StatementKind.REPEAT, StatementKind.WHILE,
                         StatementKind.ELSE, StatementKind.DEFAULT):
            return self.children[0]
        if self.kind == StatementKind.CASE:
            return self.children[1]
        if self.kind == StatementKind.FOR:
            return self.children[2]
        return None

    @property
    def init(self) -> Optional["SyntaxNode"]:
        """For: the initializing Assign node."""
        if self.kind == StatementKind.FOR:
            return self.children[0]
        return None

    @property
    def bound(self) -> Optional["SyntaxNode"]:
        """For: the ToBound or DownToBound clause."""
        if self.kind == StatementKind.FOR:
            return self.children[1]
        return None

    @property
    def bound_expression(self) -> Optional["SyntaxNode"]:
        """ToBound and DownToBound: the limit expression."""
        if self.kind in (StatementKind.TO_BOUND, StatementKind.DOWNTO_BOUND):
            return self.children[0]
        return None

    @property
    def selector(self) -> Optional["SyntaxNode"]:
        """Switch: the expression being switched on."""
        if self.kind == StatementKind.SWITCH:
            return self.children[0]
        return None

    @property
    def first_case(self) -> Optional["SyntaxNode"]:
        """Switch: head of the Case chain."""
        if self.kind == StatementKind.SWITCH:
            return self.children[1]
        return None

    @property
    def case_value(self) -> Optional["SyntaxNode"]:
        """Case: the value compared with the selector."""
        if self.kind == StatementKind.CASE:
            return self.children[0]
        return None

    @property
    def next_case(self) -> Optional["SyntaxNode"]:
        """Case: the next Case or the trailing Default."""
        if self.kind == StatementKind.CASE:
            return self.sibling
        return None

    @property
    def varlist(self) -> Optional["SyntaxNode"]:
        """Declaration: the first declared Identifier."""
        if self.kind == StatementKind.DECLARATION:
            return self.children[1]
        return None

    @property
    def next_declared_name(self) -> Optional["SyntaxNode"]:
        """Identifier inside a varlist: the next declared Identifier."""
        if self.kind == ExpressionKind.IDENTIFIER:
            return self.children[0]
        return None

    @property
    def expression(self) -> Optional["SyntaxNode"]:
        """Assign: the right-hand side. Write: the value written."""
        if self.kind in (StatementKind.ASSIGN, StatementKind.WRITE):
            return self.children[0]
        return None

    @property
    def left(self) -> Optional["SyntaxNode"]:
        """BinaryOp: the left operand."""
        if self.kind == ExpressionKind.BINARY_OP:
            return self.children[0]
        return None

    @property
    def right(self) -> Optional["SyntaxNode"]:
        """BinaryOp: the right operand."""
        if self.kind == ExpressionKind.BINARY_OP:
            return self.children[1]
        return None

    @property
    def next_in_sequence(self) -> Optional["SyntaxNode"]:
        """The following statement in program order, stepping over an Else."""
        branch = self.else_branch
        if branch is not None:
            return branch.sibling
        return self.sibling


# =============================================================================
# Node Allocation
# =============================================================================

def new_statement_node(
    kind: StatementKind,
    location: Optional[SourceLocation] = None,
) -> SyntaxNode:
    """Create an empty statement node of the given kind."""
    return SyntaxNode(node_kind=NodeKind.STATEMENT, kind=kind, location=location)


def new_expression_node(
    kind: ExpressionKind,
    location: Optional[SourceLocation] = None,
) -> SyntaxNode:
    """Create an empty expression node of the given kind."""
    return SyntaxNode(node_kind=NodeKind.EXPRESSION, kind=kind, location=location)


def new_program_node(location: Optional[SourceLocation] = None) -> SyntaxNode:
    """Create an empty Program node."""
    return SyntaxNode(node_kind=NodeKind.PROGRAM, location=location)


# =============================================================================
# Chain Iteration
# =============================================================================

def iter_sequence(head: Optional[SyntaxNode]) -> Iterator[SyntaxNode]:
    """Yield the statements of a sequence in program order, without Else nodes."""
    node = head
    while node is not None:
        yield node
        node = node.next_in_sequence


def iter_varlist(first: Optional[SyntaxNode]) -> Iterator[SyntaxNode]:
    """Yield the Identifier nodes of a declaration's varlist."""
    node = first
    while node is not None:
        yield node
        node = node.children[0]


def iter_cases(first: Optional[SyntaxNode]) -> Iterator[SyntaxNode]:
    """Yield a Switch's Case nodes followed by its Default, if any."""
    node = first
    while node is not None:
        yield node
        node = node.sibling


def iter_siblings(head: Optional[SyntaxNode]) -> Iterator[SyntaxNode]:
    """Yield every node reachable through raw sibling links, Else included."""
    node = head
    while node is not None:
        yield node
        node = node.sibling


def iter_tree(root: Optional[SyntaxNode]) -> Iterator[tuple[SyntaxNode, int]]:
    """
    Yield (node, depth) for a node, its sibling chain and all descendants.

    Order is the listing order: a node, then its child chains slot by
    slot, then its sibling. Children are one level deeper than their
    parent; siblings share their depth. The walk keeps an explicit stack,
    so tree depth is not limited by the recursion limit.
    """
    pending: list[tuple[SyntaxNode, int]] = []
    if root is not None:
        pending.append((root, 0))

    while pending:
        node, depth = pending.pop()
        yield node, depth

        # Pushed first so it comes out after every child chain
        if node.sibling is not None:
            pending.append((node.sibling, depth))
        for child in reversed(node.children):
            if child is not None:
                pending.append((child, depth + 1))


# =============================================================================
# Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for syntax tree visitors.

    visit() dispatches on the node's kind to visit_<kind>, for example
    visit_if, visit_binary_op or visit_program. Unhandled kinds fall
    back to generic_visit, which walks every child chain.

    Sibling chains are walked iteratively by visit_chain, so long
    statement sequences do not deepen the recursion. Child slots are
    visited recursively; use iter_tree for a walk of unbounded depth.

    Usage:
        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_identifier(self, node):
                self.names.append(node.name)
                self.generic_visit(node)

        collector = NameCollector()
        collector.visit(tree)
    """

    def visit(self, node: SyntaxNode):
        if node.kind is None:
            method_name = f"visit_{node.node_kind.name.lower()}"
        else:
            method_name = f"visit_{node.kind.name.lower()}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def visit_chain(self, head: Optional[SyntaxNode]) -> None:
        """Visit a node and everything linked after it through sibling."""
        for node in iter_siblings(head):
            self.visit(node)

    def generic_visit(self, node: SyntaxNode) -> None:
        for child in node.children:
            if child is not None:
                self.visit_chain(child)


# =============================================================================
# Tree Printer
# =============================================================================

class TreePrinter:
    """
    Renders a syntax tree as an indented listing.

    The walk is iter_tree, so long left-folded expressions and long
    varlists print at any length the parser accepts.

    Children are indented two spaces under their parent and siblings
    share their indent, so a threaded Else lines up with its If:

        If
          Id: x
          Write
            Id: x
        Else
          Write
            Const: 0

    Usage:
        output = TreePrinter().print(tree)
    """

    INDENT = "  "

    def __init__(self):
        self.output: list[str] = []

    def print(self, node: Optional[SyntaxNode]) -> str:
        """Print a node and its sibling chain; return the listing."""
        self.output = [
            f"{self.INDENT * depth}{self.label(current)}"
            for current, depth in iter_tree(node)
        ]
        return "\n".join(self.output)

    @staticmethod
    def label(node: SyntaxNode) -> str:
        """The one-line description of a node."""
        if node.node_kind == NodeKind.PROGRAM:
            return "Program"

        kind = node.kind
        if kind == StatementKind.DECLARATION:
            type_name = node.op.name.lower() if node.op else "?"
            return f"Declare: {type_name}"
        if kind == StatementKind.ASSIGN:
            return f"Assign to: {node.name}"
        if kind == StatementKind.READ:
            return f"Read: {node.name}"
        if kind == ExpressionKind.BINARY_OP:
            return f"Op: {SYMBOLS.get(node.op, '?')}"
        if kind == ExpressionKind.CONSTANT:
            return f"Const: {node.value}"
        if kind == ExpressionKind.IDENTIFIER:
            return f"Id: {node.name}"
        if kind == ExpressionKind.STRING_LITERAL:
            return f"Str: {node.name}"

        return {
            StatementKind.WRITE: "Write",
            StatementKind.IF: "If",
            StatementKind.ELSE: "Else",
            StatementKind.REPEAT: "Repeat",
            StatementKind.WHILE: "While",
            StatementKind.FOR: "For",
            StatementKind.TO_BOUND: "To",
            StatementKind.DOWNTO_BOUND: "Downto",
            StatementKind.SWITCH: "Switch",
            StatementKind.CASE: "Case",
            StatementKind.DEFAULT: "Default",
        }.get(kind, "Unknown node kind")
