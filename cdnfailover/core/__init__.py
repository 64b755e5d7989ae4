"""Core snippet generation, pattern compilation and file transform.

WHY: The core package holds everything that turns asset entries into
rewritten HTML: the data records, the two snippet builders, the pattern
compiler, the marker replacer and the per-file transform. None of it
touches the filesystem or the command line.

HOW: models.py defines the records, snippets.py renders output,
compiler.py pairs markers with rendered snippets, replacer.py substitutes
markers in text, files.py models files in flight, transform.py applies
compiled patterns to each file.

RULES:
- Snippet builders are pure and never raise
- Compiled patterns are immutable and shared by every file in a build
- The transform keeps no state between files
"""
