"""Compiler subsystem package.

This package turns a resolved program into a runnable artifact on a cache miss.
It includes:
- Compiler: The external compiler, invoked as a subprocess
- Builder: Stages the source, compiles into the cache entry and prunes stale entries
- Runnable: Executable wrapper around a compiled artifact
- RunnableMetadata: Metadata about the artifact and where it came from

The typical workflow is:
1. Create a builder: builder = Builder(store, Compiler("swiftc"))
2. Build on a cache miss: runnable = builder.build(program, key)
3. Execute: status = runnable(args)
"""

from .builder import Builder, BuildError
from .compiler import Compiler
from .runnable import Runnable, RunnableMetadata

__all__ = ["Builder", "BuildError", "Compiler", "Runnable", "RunnableMetadata"]
