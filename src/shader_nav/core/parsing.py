import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from shader_nav.core.languages import normalize_language
from shader_nav.core.positions import PositionMap
from shader_nav.errors import ParseSetupError, SourceReadError, UriError

logger = logging.getLogger(__name__)


class ParserHandle:
    """Owns one tree-sitter parser; parses are serialized on its lock.

    Callers serving concurrent requests should give each worker its own
    handle rather than sharing one.
    """

    def __init__(self, language: str, parser: Parser | None = None) -> None:
        self.language = normalize_language(language)
        if parser is None:
            try:
                parser = get_parser(cast(SupportedLanguage, self.language))
            except (LookupError, ValueError) as exc:
                raise ParseSetupError(f"Cannot load the {self.language} grammar: {exc}") from exc
        self._parser = parser
        self._lock = threading.Lock()

    def parse(self, source: bytes) -> Tree:
        with self._lock:
            tree = self._parser.parse(source)
        if tree is None:
            raise ParseSetupError(f"The {self.language} parser produced no tree")
        return tree


def path_to_uri(path: Path) -> str:
    try:
        return path.resolve().as_uri()
    except (OSError, ValueError) as exc:
        raise UriError(f"Cannot build a file URI for {path!s}: {exc}") from exc


@dataclass(frozen=True)
class ParseContext:
    """Source text, syntax tree and position map for one file snapshot."""

    path: Path
    uri: str
    language: str
    source: bytes
    tree: Tree
    position_map: PositionMap = field(repr=False)

    @classmethod
    def from_source(cls, handle: ParserHandle, source: bytes, path: str | Path) -> "ParseContext":
        file_path = Path(path)
        uri = path_to_uri(file_path)
        tree = handle.parse(source)
        if tree.root_node.has_error:
            logger.debug("Parsed %s with syntax errors; navigating the partial tree", file_path)
        return cls(
            path=file_path,
            uri=uri,
            language=handle.language,
            source=source,
            tree=tree,
            position_map=PositionMap(source),
        )

    @classmethod
    def from_path(cls, handle: ParserHandle, path: str | Path) -> "ParseContext":
        file_path = Path(path)
        try:
            source = file_path.read_bytes()
        except OSError as exc:
            raise SourceReadError(f"Cannot read {file_path!s}: {exc}") from exc
        return cls.from_source(handle, source, file_path)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def node_text(self, node: Node) -> bytes:
        return self.source[node.start_byte : node.end_byte]
