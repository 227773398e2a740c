"""Lexical analysis and parsing of the surface language into Surface Nodes.

All grammar can be loosely defined as follows:

```
<node>    ::= <tuple> | <int> | <str> | <atom>
<tuple>   ::= "(" <node>* ")"           ; "()" is legal: it is the nil literal inside (quote ())
<int>     ::= <digit>+                  ; natural numbers only
<str>     ::= '"' <char>* '"'           ; no raw newline; \" does not close the string; no escape processing
<atom>    ::= <char>+                   ; maximal run of anything but whitespace and parentheses

<comment> ::= ";" <char>* <newline>     ; skipped along with whitespace before every token
```

Nodes carry no semantics: keywords are plain Atoms until the desugarer looks at them.
"""

from dataclasses import dataclass

from lcomp.lang.error import ParseError
from lcomp.pure.term import deep_recursion


LINE_COMMENT = ";"
TUPLE_BEGIN = "("
TUPLE_END = ")"
QUOTE_MARK = "\""


class Node:
    """Superclass of surface syntax nodes. str() gives back surface syntax."""

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


@dataclass(frozen=True, repr=False)
class Atom(Node):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True, repr=False)
class Int(Node):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True, repr=False)
class Str(Node):
    value: str

    def __str__(self):
        return f"{QUOTE_MARK}{self.value}{QUOTE_MARK}"


@dataclass(frozen=True, repr=False)
class Tuple(Node):
    elements: tuple

    def __str__(self):
        return TUPLE_BEGIN + " ".join(str(element) for element in self.elements) + TUPLE_END


def tuple_of(*elements):
    """Shorthand for Tuple(elements)."""
    return Tuple(tuple(elements))


class _Delimiter:
    """Token for a parenthesis. Never escapes the parser."""

    def __init__(self, shape, offset):
        self.shape = shape
        self.offset = offset


class Parser:
    """Recursive-descent parser over a single source string."""

    def __init__(self, text):
        self.text = text
        self.offset = 0

    def parse_all(self):
        """Returns every top-level node in self.text, in order."""
        nodes = []
        with deep_recursion():
            node = self.next_node(0)
            while node is not None:
                nodes.append(node)
                node = self.next_node(0)
        return nodes

    def next_node(self, depth):
        """Returns the next node, a closing delimiter if depth > 0 and one is next, or None at end of input."""
        begin = self.next_token()
        if begin is None:
            return None

        if not isinstance(begin, _Delimiter):
            return begin
        elif begin.shape == TUPLE_END:
            if depth == 0:
                raise self.error("'{}' has unmatched '{}'", begin.offset, begin.offset + 1, TUPLE_END)
            return begin

        elements = []
        node = self.next_node(depth + 1)
        while not (isinstance(node, _Delimiter) and node.shape == TUPLE_END):
            if node is None:
                raise self.error("'{}' has unclosed '{}'", begin.offset, begin.offset + 1, TUPLE_BEGIN)
            elements.append(node)
            node = self.next_node(depth + 1)
        return Tuple(tuple(elements))

    def next_token(self):
        """Returns the next token (a _Delimiter or a leaf Node), or None at end of input."""
        self.skip_comments()
        if self.offset >= len(self.text):
            return None

        char = self.text[self.offset]
        if Parser.is_delimiter(char):
            self.offset += 1
            return _Delimiter(char, self.offset - 1)

        if char == QUOTE_MARK:
            return self.next_string()

        start = self.offset
        while self.offset < len(self.text) and not self.is_boundary(self.text[self.offset]):
            self.offset += 1
        content = self.text[start:self.offset]

        if content[0].isdigit():
            if not content.isdigit() or not content.isascii():
                raise self.error("'{}' has malformed integer '{}'", start, self.offset, content)
            return Int(int(content))
        return Atom(content)

    def next_string(self):
        """Reads a string literal starting at the opening quote."""
        start = self.offset
        self.offset += 1  # skip opening "

        while self.offset < len(self.text):
            char = self.text[self.offset]
            if char == QUOTE_MARK and self.text[self.offset - 1] != "\\":
                break
            elif char == "\n":
                raise self.error("'{}' has a newline inside a string", start, self.offset)
            self.offset += 1
        else:
            raise self.error("'{}' has an unterminated string", start, self.offset)

        self.offset += 1  # skip closing "
        return Str(self.text[start + 1:self.offset - 1])

    def skip_comments(self):
        """Skips any interleaving of whitespace and line comments."""
        seen_comment = True
        while seen_comment:
            seen_comment = False
            while self.offset < len(self.text) and self.text[self.offset].isspace():
                self.offset += 1
            if self.text.startswith(LINE_COMMENT, self.offset):
                newline = self.text.find("\n", self.offset)
                self.offset = len(self.text) if newline == -1 else newline + 1
                seen_comment = True

    def error(self, msg, start, end, *snippets):
        """Returns a ParseError pointing at text[start:end], reported relative to the line it occurs on."""
        line_start = self.text.rfind("\n", 0, start) + 1
        line_end = self.text.find("\n", start)
        line = self.text[line_start:] if line_end == -1 else self.text[line_start:line_end]

        end = min(end, line_start + len(line))
        return ParseError(msg, (line,) + snippets, start=start - line_start, end=max(end - line_start, 0))

    @staticmethod
    def is_delimiter(char):
        return char in (TUPLE_BEGIN, TUPLE_END)

    @staticmethod
    def is_boundary(char):
        return char.isspace() or Parser.is_delimiter(char)


def parse(text):
    """Parses text, which must hold exactly one top-level form."""
    nodes = Parser(text).parse_all()
    if len(nodes) != 1:
        raise ParseError("expected exactly one top-level form, found {}", str(len(nodes)), diagnosis=False)
    return nodes[0]


def parse_all(text):
    """Parses every top-level form in text."""
    return Parser(text).parse_all()
