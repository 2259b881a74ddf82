"""Parse annotated Kotlin guide sources.

A guide source is a regular Kotlin file. File directives are declared as
``@file:Name("value")`` annotations, and the body of ``fun main()`` holds a
sequence of annotated statements::

    @file:Title("Basic animation")
    @file:URL("animation/basicAnimations")

    package docs.`50_Animation`

    import org.openrndr.application
    import guidegen.annotations.*

    fun main() {
        @Text
        \"""
        # Basic animation
        \"""

        @Code
        application {
            program { }
        }
    }

Supported statement annotations:

- ``@Text``: a string literal holding markdown prose
- ``@Code``: a statement shown as a code block; ``application { }`` calls
  also become runnable and exported examples
- ``@Code.Block``: a statement shown as a code block only, a ``run { }``
  wrapper is removed
- ``@Application``: a runnable example that is not shown
- ``@Exclude``: a statement that is dropped entirely
- ``@Media.Image`` / ``@Media.Video``: a string literal with a media URL

Unannotated statements inside ``main`` are ignored, as are statements
carrying any other annotation (``@Suppress``, ``@OptIn``). Top level declarations
other than ``main`` are copied into every generated example.
"""

import re
import textwrap
from typing import Callable, List, Optional, Tuple

from .errors import SourceStructureError
from .model import ParseResult

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*")
_MAIN = re.compile(r"fun\s+main\s*\(\s*\)\s*\{")
_APPLICATION = re.compile(r"application\s*\{")
_RUN_BLOCK = re.compile(r"run\s*\{(.*)\}\s*", re.DOTALL)
_ANNOTATIONS_IMPORT = re.compile(r"import\s+[\w.]*\bannotations\.\*\s*$")
_PACKAGE = re.compile(r"package\b")
_IMPORT = re.compile(r"import\s")

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = set(_OPENERS.values())

# A line ending in one of these continues on the next line
_CONTINUATION_ENDINGS = tuple("=+-*/%.,(&|:") + ("->",)
_CONTINUATION_START = re.compile(r"\s*(?:\.|\?\.|\?:|&&|\|\||(?:else|catch|finally)\b)")

STATEMENT_ANNOTATIONS = {"Code", "Code.Block", "Application", "Exclude"}
LITERAL_ANNOTATIONS = {"Text", "Media.Image", "Media.Video"}
_OWN_ANNOTATION_ROOTS = {
    name.split(".")[0] for name in STATEMENT_ANNOTATIONS | LITERAL_ANNOTATIONS
}


def trim_indent(text: str) -> str:
    """Drop a blank first and last line and remove the common indentation."""
    lines = text.split("\n")
    if lines and not lines[0].strip():
        lines = lines[1:]
    if lines and not lines[-1].strip():
        lines = lines[:-1]
    return textwrap.dedent("\n".join(lines))


class _Scanner:
    """Cursor over Kotlin source text that understands strings and comments."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str, pos: Optional[int] = None) -> SourceStructureError:
        if pos is None:
            pos = self.pos
        return SourceStructureError(message, line=self.text.count("\n", 0, pos) + 1)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def match(self, pattern: re.Pattern) -> Optional[re.Match]:
        m = pattern.match(self.text, self.pos)
        if m:
            self.pos = m.end()
        return m

    def skip_space(self) -> None:
        """Skip whitespace and comments."""
        while not self.at_end():
            if self.peek().isspace():
                self.pos += 1
            elif self.startswith("//"):
                self._skip_line_comment()
            elif self.startswith("/*"):
                self._skip_block_comment()
            else:
                return

    def read_line(self) -> str:
        end = self.text.find("\n", self.pos)
        if end == -1:
            end = len(self.text)
        line = self.text[self.pos : end]
        self.pos = end
        return line

    def read_identifier(self) -> str:
        m = self.match(_IDENT)
        if not m:
            raise self.error("expected an identifier")
        return m.group(0)

    def read_parenthesized(self) -> str:
        """Read a balanced ``( ... )`` group and return its inner text."""
        start = self.pos
        self._skip_balanced()
        return self.text[start + 1 : self.pos - 1]

    def read_string_literal(self) -> str:
        """Read a string literal and return its value.

        Raw strings keep their content verbatim. Escapes in regular strings
        are decoded. Templates are kept as written in both.
        """
        if self.startswith('"""'):
            start = self.pos + 3
            self._skip_string()
            return self.text[start : self.pos - 3]
        if self.peek() != '"':
            raise self.error("expected a string literal")
        start = self.pos + 1
        self._skip_string()
        return _unescape(self.text[start : self.pos - 1])

    def read_statement(self) -> str:
        """Read one statement, following brackets, strings and comments.

        A statement ends at a newline or ``;`` outside any bracket, unless
        the line ends with an operator or the next line continues it. A
        closing bracket that was not opened by the statement also ends it.
        """
        start = self.pos
        depth: List[Tuple[str, int]] = []
        while not self.at_end():
            ch = self.peek()
            if self.startswith("//"):
                self._skip_line_comment()
            elif self.startswith("/*"):
                self._skip_block_comment()
            elif ch == '"':
                self._skip_string()
            elif ch == "'":
                self._skip_char()
            elif ch in _OPENERS:
                depth.append((_OPENERS[ch], self.pos))
                self.pos += 1
            elif ch in _CLOSERS:
                if not depth:
                    break
                expected, _ = depth.pop()
                if ch != expected:
                    raise self.error(f"'{ch}' does not match the opening bracket")
                self.pos += 1
            elif ch in "\n;" and not depth:
                if ch == ";" or not self._continues(start):
                    break
                self.pos += 1
            else:
                self.pos += 1
        if depth:
            raise self.error("unterminated bracket", depth[-1][1])
        statement = self.text[start : self.pos]
        if self.peek() == ";":
            self.pos += 1
        return statement.strip()

    def indent_of(self, pos: int) -> int:
        """Return the indentation of the line containing ``pos``."""
        line_start = self.text.rfind("\n", 0, pos) + 1
        line = self.text[line_start:pos]
        return len(line) - len(line.lstrip())

    def _continues(self, start: int) -> bool:
        line_start = max(start, self.text.rfind("\n", 0, self.pos) + 1)
        current = _strip_line_comment(self.text[line_start : self.pos]).rstrip()
        if current.endswith(_CONTINUATION_ENDINGS) and not current.endswith(
            ("++", "--", "*/")
        ):
            return True
        return bool(_CONTINUATION_START.match(self.text, self.pos))

    def _skip_balanced(self) -> None:
        opener = self.peek()
        if opener not in _OPENERS:
            raise self.error("expected an opening bracket")
        start = self.pos
        depth = 0
        while not self.at_end():
            ch = self.peek()
            if self.startswith("//"):
                self._skip_line_comment()
            elif self.startswith("/*"):
                self._skip_block_comment()
            elif ch == '"':
                self._skip_string()
            elif ch == "'":
                self._skip_char()
            elif ch in _OPENERS:
                depth += 1
                self.pos += 1
            elif ch in _CLOSERS:
                depth -= 1
                self.pos += 1
                if depth == 0:
                    return
            else:
                self.pos += 1
        raise self.error("unterminated bracket", start)

    def _skip_string(self) -> None:
        start = self.pos
        raw = self.startswith('"""')
        self.pos += 3 if raw else 1
        while not self.at_end():
            if raw and self.startswith('"""'):
                # A raw string may end with extra quotes
                while self.startswith('""""'):
                    self.pos += 1
                self.pos += 3
                return
            ch = self.peek()
            if not raw and ch == '"':
                self.pos += 1
                return
            if not raw and ch == "\\":
                self.pos += 2
            elif not raw and ch == "\n":
                break
            elif self.startswith("${"):
                self.pos += 1
                self._skip_balanced()
            else:
                self.pos += 1
        raise self.error("unterminated string literal", start)

    def _skip_char(self) -> None:
        start = self.pos
        end = self.text.find("'", self.pos + 1)
        if self.text.startswith("\\", self.pos + 1):
            end = self.text.find("'", self.pos + 3)
        if end == -1 or "\n" in self.text[self.pos : end]:
            raise self.error("unterminated character literal", start)
        self.pos = end + 1

    def _skip_line_comment(self) -> None:
        self.read_line()

    def _skip_block_comment(self) -> None:
        start = self.pos
        depth = 0
        while not self.at_end():
            if self.startswith("/*"):
                depth += 1
                self.pos += 2
            elif self.startswith("*/"):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            else:
                self.pos += 1
        raise self.error("unterminated block comment", start)


_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "$": "$",
}


def _unescape(value: str) -> str:
    def replace(m: re.Match) -> str:
        escape = m.group(1)
        if len(escape) == 5:
            return chr(int(escape[1:], 16))
        return _ESCAPES.get(escape, m.group(0))

    return re.sub(r"\\(u[0-9A-Fa-f]{4}|.)", replace, value)


def _strip_line_comment(line: str) -> str:
    # Good enough for continuation checks, which only look at the line end
    idx = line.rfind("//")
    return line[:idx] if idx != -1 and '"' not in line[idx:] else line


class _SourceParser:
    def __init__(
        self,
        content: str,
        namespace: str,
        mk_link: Optional[Callable[[int], str]],
    ):
        self.scanner = _Scanner(content)
        self.namespace = namespace
        self.mk_link = mk_link
        self.directives = {}
        self.imports: List[str] = []
        self.declarations: List[str] = []
        self.doc_parts: List[str] = []
        self.runnable_bodies: List[str] = []
        self.exportable_bodies: List[str] = []

    def parse(self) -> ParseResult:
        self._parse_top_level()
        return ParseResult(
            directives=self.directives,
            doc="\n\n".join(self.doc_parts) + "\n" if self.doc_parts else "",
            runnable=[self._example(body) for body in self.runnable_bodies],
            exportable=[
                self._example(body, link=self.mk_link(i) if self.mk_link else None)
                for i, body in enumerate(self.exportable_bodies)
            ],
        )

    def _parse_top_level(self) -> None:
        s = self.scanner
        found_main = False
        while True:
            s.skip_space()
            if s.at_end():
                break
            start = s.pos
            if s.startswith("@file:"):
                s.pos += len("@file:")
                self._parse_directive()
            elif s.match(_PACKAGE):
                s.read_line()
            elif _IMPORT.match(s.text, s.pos):
                line = s.read_line().strip()
                if not _ANNOTATIONS_IMPORT.match(line):
                    self.imports.append(line)
            elif s.match(_MAIN):
                if found_main:
                    raise s.error("more than one fun main()", start)
                found_main = True
                self._parse_main()
            else:
                if s.peek() == "@":
                    s.pos += 1
                    s.read_identifier()
                    s.skip_space()
                    if s.peek() == "(":
                        s.read_parenthesized()
                    s.skip_space()
                statement = s.read_statement()
                if not statement and s.peek() in _CLOSERS:
                    raise s.error(f"unexpected '{s.peek()}'")
                self.declarations.append(s.text[start : s.pos].strip())
        if not found_main:
            raise SourceStructureError("no fun main() { ... } block found")

    def _parse_directive(self) -> None:
        s = self.scanner
        name = s.read_identifier()
        s.skip_space()
        if s.peek() != "(":
            raise s.error(f"@file:{name} needs a value")
        args_start = s.pos + 1
        inner = s.read_parenthesized()
        inner_scanner = _Scanner(inner)
        inner_scanner.skip_space()
        if inner_scanner.peek() == '"':
            try:
                self.directives[name] = inner_scanner.read_string_literal()
            except SourceStructureError as e:
                raise s.error(f"malformed value for @file:{name}", args_start) from e
        else:
            self.directives[name] = inner.strip()

    def _parse_main(self) -> None:
        s = self.scanner
        opened_at = s.pos - 1
        while True:
            s.skip_space()
            if s.at_end():
                raise s.error("fun main() is never closed", opened_at)
            if s.peek() == "}":
                s.pos += 1
                return
            if s.peek() == "@":
                self._parse_annotated()
            else:
                s.read_statement()
                if s.peek() in _CLOSERS - {"}"}:
                    raise s.error(f"unexpected '{s.peek()}'")

    def _parse_annotated(self) -> None:
        s = self.scanner
        at = s.pos
        s.pos += 1
        name = s.read_identifier()
        if name in LITERAL_ANNOTATIONS:
            s.skip_space()
            if s.peek() != '"':
                raise s.error(f"@{name} must be followed by a string literal", at)
            literal = s.read_string_literal()
            self._add_literal(name, literal)
        elif name in STATEMENT_ANNOTATIONS:
            s.skip_space()
            if s.at_end() or s.peek() in _CLOSERS:
                raise s.error(f"@{name} must be followed by a statement", at)
            indent = s.indent_of(s.pos)
            statement = s.read_statement()
            if not statement:
                raise s.error(f"@{name} must be followed by a statement", at)
            self._add_statement(name, textwrap.dedent(" " * indent + statement))
        elif name.split(".")[0] in _OWN_ANNOTATION_ROOTS:
            raise s.error(f"unknown annotation @{name}", at)
        else:
            # Plain Kotlin annotation such as @Suppress, ignored with its statement
            s.skip_space()
            if s.peek() == "(":
                s.read_parenthesized()
            s.read_statement()

    def _add_literal(self, name: str, literal: str) -> None:
        if name == "Text":
            self.doc_parts.append(trim_indent(literal).strip("\n"))
        elif name == "Media.Image":
            self.doc_parts.append(f"![]({literal})")
        else:
            self.doc_parts.append(
                "<video controls>\n"
                f'    <source src="{literal}" type="video/mp4"></source>\n'
                "</video>"
            )

    def _add_statement(self, name: str, code: str) -> None:
        if name == "Exclude":
            return
        if name == "Application":
            self.runnable_bodies.append(code)
            return
        if name == "Code.Block":
            m = _RUN_BLOCK.fullmatch(code)
            if m:
                code = trim_indent(m.group(1))
            self.doc_parts.append(_fenced(code))
            return
        self.doc_parts.append(_fenced(code))
        if _APPLICATION.match(code):
            self.runnable_bodies.append(code)
            self.exportable_bodies.append(code)

    def _example(self, body: str, link: Optional[str] = None) -> str:
        lines = [f"package {self.namespace}", ""]
        if self.imports:
            lines.extend(self.imports)
            lines.append("")
        if link:
            lines.extend(["/**", f" * Example source: {link}", " */"])
        lines.append("fun main() {")
        lines.extend(f"    {line}" if line.strip() else "" for line in body.split("\n"))
        lines.append("}")
        for declaration in self.declarations:
            lines.extend(["", declaration])
        return "\n".join(lines) + "\n"


def _fenced(code: str) -> str:
    return f"```kotlin\n{code}\n```"


def process(
    content: str,
    namespace: str,
    mk_link: Optional[Callable[[int], str]] = None,
) -> ParseResult:
    """Parse a guide source into directives, a markdown body and examples.

    Args:
        content: Source text with ``\\n`` line endings
        namespace: Package declared by every generated example
        mk_link: Optional builder for the public URL of exported example N

    Raises:
        SourceStructureError: if the annotation structure is malformed
    """
    return _SourceParser(content, namespace, mk_link).parse()
