"""memobench -- throughput comparison of Python memoization libraries.

Usage::

    memobench                      # default suite sequence
    memobench --custom-equality    # also run the custom-key suite
    memobench --list               # show suites and candidates
"""

__version__ = "0.1.0"
