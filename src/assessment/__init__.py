"""
Candidate assessment API package.

Submissions are graded by running two code snippets on a remote execution
provider and scoring a multiple-choice answer locally. Results and the
recruiter's custom questions live in in-memory stores for the lifetime of
the process.
"""

from .router import router  # noqa: F401
