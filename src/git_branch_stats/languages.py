from __future__ import annotations

import dataclasses
import re
from pathlib import PurePosixPath

from .paths import clean_path, matches_path


@dataclasses.dataclass(frozen=True)
class Language:
    name: str
    group: str = ""

    def __post_init__(self) -> None:
        if not self.group:
            object.__setattr__(self, "group", self.name)


@dataclasses.dataclass(frozen=True)
class Classification:
    binary: bool = False
    vendored: bool = False
    generated: bool = False
    language: Language | None = None

    @property
    def countable(self) -> bool:
        return not (self.binary or self.vendored or self.generated) and self.language is not None


_L = Language

BY_FILENAME: dict[str, Language] = {
    "Dockerfile": _L("Dockerfile"),
    "Containerfile": _L("Dockerfile"),
    "Makefile": _L("Makefile"),
    "makefile": _L("Makefile"),
    "GNUmakefile": _L("Makefile"),
    "CMakeLists.txt": _L("CMake"),
    "Rakefile": _L("Ruby"),
    "Gemfile": _L("Ruby"),
    "Vagrantfile": _L("Ruby"),
    "Jenkinsfile": _L("Groovy"),
    "BUILD": _L("Starlark"),
    "BUILD.bazel": _L("Starlark"),
    "WORKSPACE": _L("Starlark"),
    ".bashrc": _L("Shell"),
    ".zshrc": _L("Shell"),
    ".gitignore": _L("Ignore List"),
    ".dockerignore": _L("Ignore List"),
}

BY_EXTENSION: dict[str, Language] = {
    ".py": _L("Python"),
    ".pyi": _L("Python"),
    ".pyx": _L("Cython"),
    ".ipynb": _L("Jupyter Notebook"),
    ".js": _L("JavaScript"),
    ".mjs": _L("JavaScript"),
    ".cjs": _L("JavaScript"),
    ".jsx": _L("JSX", "JavaScript"),
    ".ts": _L("TypeScript"),
    ".mts": _L("TypeScript"),
    ".tsx": _L("TSX", "TypeScript"),
    ".vue": _L("Vue"),
    ".svelte": _L("Svelte"),
    ".java": _L("Java"),
    ".kt": _L("Kotlin"),
    ".kts": _L("Kotlin"),
    ".groovy": _L("Groovy"),
    ".gradle": _L("Gradle"),
    ".scala": _L("Scala"),
    ".swift": _L("Swift"),
    ".go": _L("Go"),
    ".rs": _L("Rust"),
    ".php": _L("PHP"),
    ".rb": _L("Ruby"),
    ".erb": _L("HTML+ERB", "HTML"),
    ".cs": _L("C#"),
    ".fs": _L("F#"),
    ".c": _L("C"),
    ".h": _L("C"),
    ".cc": _L("C++"),
    ".cpp": _L("C++"),
    ".cxx": _L("C++"),
    ".hh": _L("C++"),
    ".hpp": _L("C++"),
    ".hxx": _L("C++"),
    ".m": _L("Objective-C"),
    ".mm": _L("Objective-C++"),
    ".ex": _L("Elixir"),
    ".exs": _L("Elixir"),
    ".erl": _L("Erlang"),
    ".hs": _L("Haskell"),
    ".clj": _L("Clojure"),
    ".lua": _L("Lua"),
    ".pl": _L("Perl"),
    ".pm": _L("Perl"),
    ".r": _L("R"),
    ".dart": _L("Dart"),
    ".sql": _L("SQL"),
    ".tf": _L("HCL"),
    ".hcl": _L("HCL"),
    ".proto": _L("Protocol Buffer"),
    ".graphql": _L("GraphQL"),
    ".sh": _L("Shell"),
    ".bash": _L("Shell"),
    ".zsh": _L("Shell"),
    ".fish": _L("fish"),
    ".ps1": _L("PowerShell"),
    ".bat": _L("Batchfile"),
    ".cmd": _L("Batchfile"),
    ".html": _L("HTML"),
    ".htm": _L("HTML"),
    ".css": _L("CSS"),
    ".scss": _L("SCSS"),
    ".sass": _L("Sass"),
    ".less": _L("Less"),
    ".xml": _L("XML"),
    ".svg": _L("SVG"),
    ".json": _L("JSON"),
    ".jsonc": _L("JSON with Comments", "JSON"),
    ".yml": _L("YAML"),
    ".yaml": _L("YAML"),
    ".toml": _L("TOML"),
    ".ini": _L("INI"),
    ".cfg": _L("INI"),
    ".md": _L("Markdown"),
    ".markdown": _L("Markdown"),
    ".rst": _L("reStructuredText"),
    ".adoc": _L("AsciiDoc"),
    ".tex": _L("TeX"),
    ".txt": _L("Text"),
    ".csv": _L("CSV"),
}

INTERPRETERS: dict[str, Language] = {
    "python": _L("Python"),
    "python2": _L("Python"),
    "python3": _L("Python"),
    "sh": _L("Shell"),
    "bash": _L("Shell"),
    "zsh": _L("Shell"),
    "dash": _L("Shell"),
    "node": _L("JavaScript"),
    "ruby": _L("Ruby"),
    "perl": _L("Perl"),
    "php": _L("PHP"),
    "lua": _L("Lua"),
    "fish": _L("fish"),
}

BINARY_EXTENSIONS = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
        ".pdf", ".zip", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".jar", ".war",
        ".exe", ".dll", ".so", ".dylib", ".a", ".o", ".obj", ".class", ".pyc",
        ".woff", ".woff2", ".ttf", ".otf", ".eot",
        ".mp3", ".mp4", ".wav", ".ogg", ".mov", ".avi", ".webm",
        ".sqlite", ".db", ".bin",
    }
)

DEFAULT_VENDORED_PREFIXES: tuple[str, ...] = (
    "vendor",
    "vendors",
    "node_modules",
    "bower_components",
    "third_party",
    "third-party",
    "thirdparty",
    "Pods",
    "Carthage",
    ".venv",
    "venv",
    "site-packages",
)

DEFAULT_VENDORED_GLOBS: tuple[str, ...] = (
    "*.min.js",
    "*.min.css",
    "*-min.js",
    "jquery*.js",
    "gradlew",
    "gradlew.bat",
    "mvnw",
    "mvnw.cmd",
)

DEFAULT_GENERATED_GLOBS: tuple[str, ...] = (
    "package-lock.json",
    "npm-shrinkwrap.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "Pipfile.lock",
    "uv.lock",
    "Cargo.lock",
    "Gemfile.lock",
    "composer.lock",
    "go.sum",
    "*_pb2.py",
    "*_pb2_grpc.py",
    "*.pb.go",
    "*.pb.cc",
    "*.pb.h",
    "*.generated.*",
    "*.designer.cs",
    "*.js.map",
    "*.css.map",
    "dist/*",
)

_GENERATED_MARKERS = re.compile(r"@generated\b|\bDO NOT EDIT\b|^\W*Code generated by\b", re.MULTILINE)
_SHEBANG = re.compile(r"^#!\s*(\S+)(?:\s+(\S+))?")

BINARY_SNIFF_BYTES = 8000
GENERATED_SNIFF_LINES = 5


def _interpreter_language(content: bytes) -> Language | None:
    if not content.startswith(b"#!"):
        return None
    first = content.split(b"\n", 1)[0].decode("utf-8", errors="replace")
    m = _SHEBANG.match(first)
    if not m:
        return None
    prog = m.group(1).rsplit("/", 1)[-1]
    if prog == "env" and m.group(2):
        prog = m.group(2)
    prog = re.sub(r"[\d.]+$", "", prog) or prog
    return INTERPRETERS.get(prog)


@dataclasses.dataclass(frozen=True)
class LanguageClassifier:
    """
    Path and content based language detection for excerpts.

    Lookup order: exact file name, extension (config overrides first), then the
    shebang interpreter. Vendored and generated rules are path based; generated
    also checks the first few lines for the usual "generated, do not edit" banners.
    """

    vendored_prefixes: tuple[str, ...] = DEFAULT_VENDORED_PREFIXES
    vendored_globs: tuple[str, ...] = DEFAULT_VENDORED_GLOBS
    generated_globs: tuple[str, ...] = DEFAULT_GENERATED_GLOBS
    extension_languages: tuple[tuple[str, str], ...] = ()

    def language_for(self, path: str, content: bytes = b"") -> Language | None:
        p = clean_path(path)
        base = p.rsplit("/", 1)[-1]
        if base in BY_FILENAME:
            return BY_FILENAME[base]
        if base.lower().startswith("dockerfile."):
            return BY_FILENAME["Dockerfile"]
        ext = PurePosixPath(base).suffix.lower()
        if ext:
            for override_ext, name in self.extension_languages:
                if ext == override_ext.lower():
                    return Language(name)
            if ext in BY_EXTENSION:
                return BY_EXTENSION[ext]
        return _interpreter_language(content)

    def is_binary(self, path: str, content: bytes) -> bool:
        if PurePosixPath(clean_path(path)).suffix.lower() in BINARY_EXTENSIONS:
            return True
        return b"\x00" in content[:BINARY_SNIFF_BYTES]

    def is_vendored(self, path: str) -> bool:
        return matches_path(path, self.vendored_prefixes, self.vendored_globs)

    def is_generated(self, path: str, content: bytes) -> bool:
        if matches_path(path, (), self.generated_globs):
            return True
        head = b"\n".join(content.split(b"\n", GENERATED_SNIFF_LINES)[:GENERATED_SNIFF_LINES])
        return bool(_GENERATED_MARKERS.search(head.decode("utf-8", errors="replace")))

    def classify(self, path: str, content: bytes) -> Classification:
        return Classification(
            binary=self.is_binary(path, content),
            vendored=self.is_vendored(path),
            generated=self.is_generated(path, content),
            language=self.language_for(path, content),
        )
