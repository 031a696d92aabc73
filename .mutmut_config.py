"""
Mutation testing configuration for mutmut.

Only the comparison core and record loading are mutated; the CLI,
reporting and observability layers are skipped.
"""

MUTATED_PACKAGES = (
    'src/row_validation/compare/',
    'src/row_validation/sources.py',
    'src/row_validation/validator/',
)


def pre_mutation(context):
    """
    Hook called before each mutation.

    Skips files outside the mutated packages and low-value lines.
    """
    if not context.filename.startswith(MUTATED_PACKAGES):
        context.skip = True
        return

    if context.filename.endswith('__init__.py'):
        context.skip = True
        return

    line = context.current_source_line.strip()

    # Logging and tracing calls do not affect comparison results
    if line.startswith(('logger.', 'run_logger.', 'add_span_', 'span.set_attribute')):
        context.skip = True

    if '"""' in line or "'''" in line:
        context.skip = True

    # Run the fast suites only; the property tests cover the same code
    context.config.test_command = 'python -m pytest -x -q tests/unit'
