"""
sparkvite test suite
====================

Test Modules
------------
- test_models.py: Answers model, enums, name validation
- test_commands.py: Command planner
- test_files.py: File planner, JSON helpers, templates
- test_generator.py: Orchestrator execution and rollback
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_files.py

    # Run specific test class
    pytest tests/test_files.py::TestWrapperNesting
"""
