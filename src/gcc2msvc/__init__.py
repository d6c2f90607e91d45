"""gcc2msvc — run MSVC's cl.exe with a GCC command line.

Translates GCC options, defines, include/library paths and source files
into the cl.exe/link.exe dialect, rewriting WSL ``/mnt/<drive>`` paths into
native drive paths, and runs the resulting command.
"""

__version__ = "0.1.0"
