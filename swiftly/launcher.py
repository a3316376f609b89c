"""Decides what runs for an invocation: a cached artifact, a fresh build or the interpreter."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO

from swiftly.cache import CacheStore, derive_cache_key
from swiftly.compile import Builder, Compiler, Runnable, RunnableMetadata
from swiftly.config import SwiftlyConfig
from swiftly.data import ProgramReference
from swiftly.interpreter import Interpreter
from swiftly.logging import get_logger
from swiftly.resolver import ResolutionError, resolve_program
from swiftly.utils import EXIT_FAILURE

logger = get_logger("Launcher")


class Launcher:
    """Runs a program through the compilation cache.

    Exactly one process is executed per invocation: the cached artifact, the freshly built
    artifact, or the interpreter. swiftly's exit status mirrors that process, except for the
    help and no-program cases which always fail.
    """

    def __init__(self, store: CacheStore, builder: Builder, interpreter: Interpreter) -> None:
        self.store = store
        self.builder = builder
        self.interpreter = interpreter

    @classmethod
    def from_config(cls, config: SwiftlyConfig) -> "Launcher":
        """Wire a launcher and its collaborators from a config.

        Parameters
        ----------
        config : SwiftlyConfig
            The settings to use.

        Returns
        -------
        Launcher
            The launcher.
        """
        store = CacheStore(config.cache_path)
        compiler = Compiler(config.compiler, config.compiler_flags)
        builder = Builder(store, compiler, config.source_extension)
        return cls(store, builder, Interpreter(config.interpreter))

    def runnable_for(self, program: ProgramReference) -> Runnable:
        """Get a runnable for a resolved program, building it on a cache miss.

        Raises
        ------
        BuildError
            If the program is not cached and compilation fails.
        """
        key = derive_cache_key(program)
        if self.store.exists(key):
            logger.debug(f"Cache hit for {key}")
            metadata = RunnableMetadata(key=key, source=program.path, cached=True)
            return Runnable(path=self.store.path_for(key), metadata=metadata)

        logger.debug(f"Cache miss for {key}")
        return self.builder.build(program, key)

    def launch(self, program: str, args: Sequence[str] = ()) -> int:
        """Run ``program`` with ``args``.

        A program that is neither a file nor on the search path is handed to the interpreter
        together with ``args``, and the cache is not touched.

        Parameters
        ----------
        program : str
            The program reference, as given on the command line.
        args : Sequence[str]
            The remaining arguments, forwarded unchanged and in order.

        Returns
        -------
        int
            The exit status of the executed process.

        Raises
        ------
        BuildError
            If compilation fails. Its ``returncode`` is the compiler's exit status.
        OSError
            If the cache entry cannot be created.
        """
        try:
            reference = resolve_program(program)
        except ResolutionError:
            logger.debug(f"Forwarding '{program}' to the interpreter")
            return self.interpreter.run([program, *args])

        runnable = self.runnable_for(reference)
        metadata = runnable.metadata
        logger.debug(f"Running {runnable!r} for {metadata.key}, source {metadata.source}")
        return runnable(args)

    def interactive(self) -> int:
        """Run the interpreter without arguments. Always reports failure."""
        self.interpreter.run()
        return EXIT_FAILURE

    def help(self, usage: str, stream: Optional[TextIO] = None) -> int:
        """Print swiftly's usage followed by the interpreter's own help. Always reports failure.

        Parameters
        ----------
        usage : str
            swiftly's usage text.
        stream : Optional[TextIO]
            Where to print. Default is ``sys.stdout``.
        """
        stream = stream if stream is not None else sys.stdout
        stream.write(usage)
        if not usage.endswith("\n"):
            stream.write("\n")
        stream.write(self.interpreter.help_text())
        stream.flush()
        return EXIT_FAILURE
