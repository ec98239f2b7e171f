from .__main__ import EXIT_ALL_PASSED, EXIT_CHECKS_FAILED, EXIT_FATAL, main

__all__ = ["main", "EXIT_ALL_PASSED", "EXIT_CHECKS_FAILED", "EXIT_FATAL"]
