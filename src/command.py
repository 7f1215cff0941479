""" Command tree produced by the parser and read by the runner. """
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Redirects:
    """ Redirection targets of a command or group; None when absent. """
    input: str | None = None
    output: str | None = None
    append: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class Plain:
    """ A program invocation: args[0] is the program name or path. """
    args: tuple[str, ...]
    redirects: Redirects = field(default_factory=Redirects)

    @property
    def name(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class Sequence:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class And:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Or:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Pipe:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Group:
    """ A parenthesised subtree run as one unit inside a child process. """
    inner: "Node"
    redirects: Redirects = field(default_factory=Redirects)


Node = Plain | Sequence | And | Or | Pipe | Group

BINARY_LABELS = {
    Sequence: ";",
    And: "&&",
    Or: "||",
    Pipe: "|",
}


def first_program(node: Node) -> str:
    """ Return argument 0 of the leftmost plain command in a subtree. """
    while not isinstance(node, Plain):
        node = node.inner if isinstance(node, Group) else node.left
    return node.name


def _format_redirects(redirects: Redirects) -> list[str]:
    parts = []
    if redirects.input:
        parts.append(f"< {redirects.input}")
    if redirects.output:
        parts.append(f"> {redirects.output}")
    if redirects.append:
        parts.append(f">> {redirects.append}")
    if redirects.error:
        parts.append(f"2> {redirects.error}")
    return parts


def format_tree(node: Node, depth: int = 0) -> str:
    """
    Render a tree as indented text, one node per line.
    Used for debug logging only.
    """
    pad = "  " * depth
    if isinstance(node, Plain):
        words = [repr(a) for a in node.args] + _format_redirects(node.redirects)
        return f"{pad}PLAIN {' '.join(words)}"
    if isinstance(node, Group):
        head = " ".join(["GROUP"] + _format_redirects(node.redirects))
        return f"{pad}{head}\n{format_tree(node.inner, depth + 1)}"
    label = BINARY_LABELS[type(node)]
    return "\n".join([
        f"{pad}{type(node).__name__.upper()} {label}",
        format_tree(node.left, depth + 1),
        format_tree(node.right, depth + 1),
    ])
