"""Open pull request finder.

Lists open pull requests across the repositories of a GitHub organization:
- Only pull requests written by a configured set of authors are kept
- A per-author, per-repository summary is printed to the terminal
- The user picks what to open by author, by ``repo:number`` or with ``all``
- Every picked pull request is opened once in the default browser
"""

__version__ = "1.0.0"
