""" Parse a token list into a command tree. """
from command import And, Group, Node, Or, Pipe, Plain, Redirects, Sequence
from constants import OPERATORS, REDIRECT_OPS

CONTROL_OPS = {";", "&&", "||", "|", ")"}
REDIRECT_FIELDS = {
    "<": "input",
    ">": "output",
    ">>": "append",
    "2>": "error",
}


def is_word(tok: str | None) -> bool:
    return tok is not None and tok not in OPERATORS and tok not in REDIRECT_OPS


class TokenStream:
    def __init__(self, tokens: list[str]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> str | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def next(self) -> str | None:
        tok = self.peek()
        self.pos += 1
        return tok

    def expect(self, tok: str):
        found = self.next()
        if found != tok:
            raise SyntaxError(f"syntax error: expected '{tok}', found {describe(found)}")


def describe(tok: str | None) -> str:
    return "end of line" if tok is None else f"'{tok}'"


def parse_redirect(stream: TokenStream, fields: dict):
    op = stream.next()
    target = stream.next()
    if not is_word(target):
        raise SyntaxError(f"syntax error: expected filename after '{op}'")
    fields[REDIRECT_FIELDS[op]] = target


def parse_simple(stream: TokenStream) -> Plain:
    """ Parse words and redirections up to the next control operator. """
    args = []
    fields = {}
    while True:
        tok = stream.peek()
        if tok is None or tok in CONTROL_OPS:
            break
        if tok in REDIRECT_OPS:
            parse_redirect(stream, fields)
        elif tok == "&":
            raise SyntaxError("syntax error: background jobs are not supported")
        elif tok == "(":
            raise SyntaxError("syntax error: unexpected '('")
        else:
            args.append(stream.next())

    if not args:
        raise SyntaxError(f"syntax error: missing command before {describe(stream.peek())}")
    return Plain(tuple(args), Redirects(**fields))


def parse_command(stream: TokenStream) -> Node:
    if stream.peek() != "(":
        return parse_simple(stream)

    stream.next()
    inner = parse_list(stream)
    stream.expect(")")
    fields = {}
    while stream.peek() in REDIRECT_OPS:
        parse_redirect(stream, fields)
    if is_word(stream.peek()) or stream.peek() == "(":
        raise SyntaxError(f"syntax error: unexpected {describe(stream.peek())} after ')'")
    return Group(inner, Redirects(**fields))


def parse_pipeline(stream: TokenStream) -> Node:
    node = parse_command(stream)
    while stream.peek() == "|":
        stream.next()
        node = Pipe(node, parse_command(stream))
    return node


def parse_and_or(stream: TokenStream) -> Node:
    node = parse_pipeline(stream)
    while stream.peek() in ("&&", "||"):
        op = stream.next()
        right = parse_pipeline(stream)
        node = And(node, right) if op == "&&" else Or(node, right)
    return node


def parse_list(stream: TokenStream) -> Node:
    node = parse_and_or(stream)
    while stream.peek() == ";":
        stream.next()
        # a trailing ';' ends the list
        if stream.peek() is None or stream.peek() == ")":
            break
        node = Sequence(node, parse_and_or(stream))
    return node


def parse_line(tokens: list[str]) -> Node | None:
    """
    Parse the tokens of one input line.
    Returns None for an empty line; raises SyntaxError on malformed input.
    """
    if not tokens:
        return None
    stream = TokenStream(tokens)
    node = parse_list(stream)
    if stream.peek() is not None:
        raise SyntaxError(f"syntax error: unexpected {describe(stream.peek())}")
    return node
