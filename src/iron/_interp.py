"""Main interpreter, the entry point for running Iron from Python.

An interpreter owns a global scope holding the builtins, the core
traversal library and the `FILE` binding, plus an engine to evaluate code
in it. The usual sequence from the command line is:

    interp = iron.Interp()
    interp.set_file("script.irl")
    interp.load_code(source)
    interp.execute()

Host code can also evaluate snippets with `run` and call Iron functions
directly with `call`.
"""

__all__ = ["Interp", "Mode", "MODULE_SUFFIX"]

import enum
import logging
import os
from pathlib import Path

import iron

_log = logging.getLogger(__name__)

# File extension for Iron modules, appended on import when missing
MODULE_SUFFIX = ".irl"


class Mode(enum.Enum):
    """Execution mode.

    Release mode runs the optimize pass over the tree before evaluation.
    Debug mode evaluates the tree exactly as parsed.
    """
    DEBUG = "debug"
    RELEASE = "release"


class Interp:
    """Interpreter and state for Iron.

    Args:
        mode: (Mode) Debug or release evaluation
        max_depth: (int) Limit on pending engine frames
        search_paths: (list[str] | None) Directories searched for imports,
            defaults to the package stdlib, ./stdlib and the working directory

    Attributes:
        mode: (Mode) Debug or release evaluation
        search_paths: (list[str]) Directories searched for imports
        engine: (Engine) Evaluation engine bound to this interpreter
        globals: (Scope) Global scope
        code: (str | None) Source given to `load_code`
        filename: (str | None) Path given to `set_file`
        ast: (ast.Root | None) Tree from the last `parse`
    """

    def __init__(self, mode=Mode.RELEASE, max_depth=iron.DEFAULT_MAX_DEPTH,
                 search_paths=None, _importing=frozenset()):
        self.mode = mode
        if search_paths is None:
            working_dir = str(Path.cwd())
            search_paths = [
                os.path.join(str(Path(__file__).parent), "stdlib"),  # Built-in stdlib
                os.path.join(working_dir, "stdlib"),  # Project stdlib
                working_dir,  # Project root
            ]
        self.search_paths = list(search_paths)
        self.engine = iron.Engine(self, max_depth)

        self.globals = iron.Scope()
        iron.builtin.populate(self.globals)
        for name, value in iron.stdlib.get_stdlib_module("core").items():
            self.globals.define(name, value)
        self.globals.define("FILE", "")
        # Snapshot used to tell what a module defined itself
        self._initial = dict(self.globals.bindings)
        # Resolved paths of modules being imported up the chain
        self._importing = _importing

        self.code = None
        self.filename = None
        self.ast = None

    def __repr__(self):
        return f"Interp<{self.mode.value}>"

    @property
    def max_depth(self):
        return self.engine.max_depth

    def set_mode(self, mode):
        self.mode = mode

    def set_file(self, path):
        """Record the script path and bind it to `FILE`."""
        self.filename = str(path)
        self.globals.define("FILE", self.filename)
        self._initial["FILE"] = self.filename
        self._importing = self._importing | {Path(path).resolve()}

    def load_code(self, code):
        """Load source to be parsed and executed, discarding any earlier tree."""
        self.code = code
        self.ast = None

    def parse(self):
        """Parse the loaded code.

        Returns:
            (ast.Root) Tree, which is also kept as `self.ast`

        Raises:
            IronError: No code has been loaded
            ParseError: Invalid source
        """
        if self.code is None:
            raise iron.IronError("no code loaded")
        self.ast = iron.parse(self.code, self.filename)
        return self.ast

    def execute(self):
        """Run the loaded code in the global scope.

        Returns:
            (int) Exit status, 0 when the script completes

        Raises:
            IronError: Any parse or evaluation failure
        """
        if self.ast is None:
            self.parse()
        _log.debug("execute %s in %s mode", self.filename or "<code>", self.mode.value)
        self.engine.run(self._prepare(self.ast), self.globals)
        return 0

    def run(self, source, filename=None):
        """Parse and evaluate source in the global scope.

        Args:
            source: (str) Iron source
            filename: (str | None) Name for positions in error messages

        Returns:
            (object) Value of the last top level expression
        """
        root = iron.parse(source, filename)
        return self.engine.run(self._prepare(root), self.globals)

    def call(self, func, *args):
        """Call an Iron callable from Python.

        Args:
            func: (Function | Builtin | str) Callable, or the name of a global
            *args: Iron values passed as positional arguments

        Returns:
            (object) The call result
        """
        if isinstance(func, str):
            func = self.lookup(func)
        return self.engine.run(iron.ast.Apply(func, args), self.globals)

    def lookup(self, name):
        """Value of a global, raises EvalError when undefined."""
        return self.globals.lookup(name)

    def define(self, name, value):
        """Bind a global, returns the value."""
        return self.globals.define(name, value)

    def dump_ast(self, rich=False, file=None):
        """Print the parsed tree of the loaded code.

        Args:
            rich: (bool) Render with rich instead of plain indented text
            file: (TextIO | None) Plain text destination, stdout by default
        """
        if self.ast is None:
            self.parse()
        if rich:
            import rich.console
            rich.console.Console().print(_rich_tree(self.ast))
        else:
            self.ast.print_tree(file=file)

    def exports(self):
        """Global bindings made by the executed code itself."""
        missing = object()
        return {
            name: value
            for name, value in self.globals.bindings.items()
            if name != "FILE" and self._initial.get(name, missing) is not value
        }

    def import_module(self, path, scope):
        """Run a module and copy its bindings into scope.

        Names of stdlib modules resolve to their Python implementation.
        Everything else is an Iron file, run in a fresh interpreter sharing
        this interpreter's configuration.

        Args:
            path: (str) Module name or path, "./x" and "../x" are relative
                to this interpreter's `FILE`
            scope: (Scope) Scope that receives the bindings

        Raises:
            ModuleError: Module not found, unreadable, or already being imported
        """
        relative = path.startswith(("./", "../"))
        if not relative:
            module = iron.stdlib.get_stdlib_module(path)
            if module is not None:
                _log.debug("import stdlib %s", path)
                for name, value in module.items():
                    scope.define(name, value)
                return

        location = self.locate(path)
        if location in self._importing:
            raise iron.ModuleError(f"circular import of {path!r} ({location})")
        try:
            code = location.read_text(encoding="utf-8")
        except OSError as e:
            raise iron.ModuleError(f"cannot read module {path!r}: {e}") from e

        _log.debug("import %s from %s", path, location)
        child = Interp(
            self.mode,
            self.max_depth,
            self.search_paths,
            _importing=self._importing | {location},
        )
        child.set_file(location)
        child.load_code(code)
        child.execute()
        for name, value in child.exports().items():
            scope.define(name, value)

    def locate(self, path):
        """Find the file for an import path.

        Returns:
            (Path) Resolved absolute file path

        Raises:
            ModuleError: No matching file
        """
        filename = path if path.endswith(MODULE_SUFFIX) else path + MODULE_SUFFIX
        if path.startswith(("./", "../")):
            anchor = Path(self.filename).parent if self.filename else Path.cwd()
            candidates = [anchor / filename]
        elif os.path.isabs(filename):
            candidates = [Path(filename)]
        else:
            candidates = [Path(directory) / filename for directory in self.search_paths]

        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        searched = ", ".join(str(c.parent) for c in candidates)
        raise iron.ModuleError(f"cannot find module {path!r} (searched {searched})")

    def _prepare(self, root):
        if self.mode is Mode.DEBUG:
            return root
        return root.optimize()


def _rich_tree(node, tree=None):
    """Build a rich tree from ast nodes."""
    import rich.text
    import rich.tree

    label = rich.text.Text(repr(node))
    if node.position is not None and node.position.start_line:
        label.append(f" {node.position.start_line}:{node.position.start_column}", style="dim")
    branch = tree.add(label) if tree is not None else rich.tree.Tree(label)
    for child in node.children():
        _rich_tree(child, branch)
    return branch
