""" Lexical analysis for shell commands. """
import shlex

from constants import OPERATORS

PUNCTUATION = "".join(sorted({c for op in OPERATORS for c in op}))


def split_operators(run: str) -> list[str]:
    """ Split a run of punctuation such as '|(' or ';;' into operators, longest first. """
    ops = []
    i = 0
    while i < len(run):
        for op in OPERATORS:
            if run.startswith(op, i):
                ops.append(op)
                i += len(op)
                break
        else:
            raise SyntaxError(f"syntax error: unexpected '{run[i]}'")
    return ops


def tokenize(line: str) -> list[str]:
    lex = shlex.shlex(line, posix=True, punctuation_chars=PUNCTUATION)
    lex.whitespace_split = True
    lex.commenters = ""

    tokens = []
    for tok in lex:
        if tok and all(c in PUNCTUATION for c in tok):
            tokens.extend(split_operators(tok))
        else:
            tokens.append(tok)

    result = []
    i = 0
    while i < len(tokens):
        if tokens[i] == "2" and i + 1 < len(tokens) and tokens[i + 1] == ">":
            result.append("2>")  # stderr redirection
            i += 2
        else:
            result.append(tokens[i])
            i += 1
    return result
