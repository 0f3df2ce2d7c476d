"""Prefix rendering of calcvm syntax trees, e.g. ``(+ 2 (* 3 4))``."""

from calcvm.operations import Op


def format_tree(node: tuple) -> str:
    """
    Render an AST in prefix notation.

    Leaves print as their value; operator nodes print as a parenthesised
    list of the operator followed by each child. The pending stack holds
    nodes still to render and literal text fragments, in reverse order.
    """
    parts = []
    pending = [node]
    while pending:
        item = pending.pop()
        if not isinstance(item, tuple):
            parts.append(item)
            continue
        op = item[0]
        if op == "number":
            parts.append(str(item[1]))
        elif op == "unary":
            pending.extend([")", item[2], f"({item[1].value} "])
        elif isinstance(op, Op):
            pending.extend([")", item[2], " ", item[1], f"({op.value} "])
        else:
            raise NotImplementedError(f"Unsupported expression node: {item}")
    return "".join(parts)
