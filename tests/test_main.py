"""
===============================================
Comprehensive pytest suite for main.py
===============================================

Sections:
---------
1. Unit tests - SynthesisRunner methods
2. CLI tests - main() argument handling and exit codes
3. Edge case tests - Invalid requests, failed renders, database errors
4. Smoke tests - Basic functionality verification

Available markers:
------------------
unit, integration, edge_case, smoke

Test Coverage:
--------------
SynthesisRunner:
- render_file: load + render
- run: SQL on stdout, failure reason on stderr, exit codes
- execute: lazy provider creation, row printing
- close: provider disposal

main() CLI:
- Argument parsing (request, --execute, --log-level)
- Exit code handling (success=0, failure=1, interrupt=130)

How to Execute:
---------------
All tests:          pytest tests/test_main.py -v
By category:        pytest tests/test_main.py -m unit
Specific test:      pytest tests/test_main.py::test_run_prints_sql
With coverage:      pytest tests/test_main.py --cov=main

Note: No database is needed; the execution provider is replaced by a fake.
"""

import logging
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from core.logger import setup_logging
from main import EXIT_FAILURE, EXIT_OK, SynthesisRunner, build_parser, main

DROP_REQUEST = {'operation': 'DROP_TABLE', 'table': 't'}
SELECT_REQUEST = {'operation': 'SELECT', 'table': 'users', 'columns': ['id', 'name']}

# ====================
# Mock Helper Classes
# ====================

class FakeProvider:
    """Mock SqlExecutionProvider matching utils.database_utils."""
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.executed = []
        self.disposed = False

    def execute(self, statement):
        self.executed.append(statement)
        if self.error is not None:
            raise self.error
        return self.rows

    def dispose(self):
        self.disposed = True


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers after main() reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_render_file(request_file):
    """Test render_file loads and renders one document."""
    result = SynthesisRunner().render_file(request_file(DROP_REQUEST))

    assert result.ok
    assert result.sql == "DROP TABLE t;"


@pytest.mark.unit
def test_run_prints_sql(request_file, capsys):
    """Test run prints the SQL and returns 0."""
    exit_code = SynthesisRunner().run(request_file(SELECT_REQUEST))

    assert exit_code == EXIT_OK
    assert "SELECT id,name FROM users;" in capsys.readouterr().out.splitlines()


@pytest.mark.unit
def test_run_with_execute_prints_rows(request_file, capsys):
    """Test --execute runs the statement and prints each row."""
    provider = FakeProvider(rows=[(1, 'Ada'), (2, 'Linus')])
    runner = SynthesisRunner(provider=provider)

    exit_code = runner.run(request_file(SELECT_REQUEST), execute=True)

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == EXIT_OK
    assert provider.executed[0].sql == "SELECT id,name FROM users;"
    assert "(1, 'Ada')" in lines
    assert "(2, 'Linus')" in lines


@pytest.mark.unit
def test_execute_creates_provider_lazily(request_file):
    """Test the provider is only built on first execution."""
    fake = FakeProvider()
    with patch('main.SqlExecutionProvider', return_value=fake) as mock_provider:
        runner = SynthesisRunner()
        mock_provider.assert_not_called()

        runner.execute(runner.render_file(request_file(DROP_REQUEST)))

    mock_provider.assert_called_once_with()
    assert runner.provider is fake


@pytest.mark.unit
def test_close_disposes_provider():
    """Test close disposes an existing provider."""
    provider = FakeProvider()
    SynthesisRunner(provider=provider).close()

    assert provider.disposed is True


@pytest.mark.unit
def test_close_without_provider():
    """Test close is a no-op before any execution."""
    SynthesisRunner().close()


# ==============
# 2. CLI TESTS
# ==============

@pytest.mark.integration
def test_main_renders_request(request_file, capsys):
    """Test main() prints SQL and exits 0."""
    exit_code = main([str(request_file(DROP_REQUEST))])

    assert exit_code == 0
    assert "DROP TABLE t;" in capsys.readouterr().out.splitlines()


@pytest.mark.integration
def test_main_stdout_holds_only_the_statement(request_file, capsys, restore_root_logger):
    """Test log records go to stderr so stdout can be redirected into a .sql file."""
    setup_logging(log_level='DEBUG', log_file='', use_colors=True)

    exit_code = main([str(request_file({'operation': 'DELETE', 'table': 't'}))])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == "DELETE FROM t;\n"
    assert "Loaded request file" in captured.err


@pytest.mark.integration
def test_main_execute_flag(request_file, capsys):
    """Test --execute routes the render through the provider."""
    fake = FakeProvider(rows=[(42,)])
    with patch('main.SqlExecutionProvider', return_value=fake):
        exit_code = main([str(request_file(SELECT_REQUEST)), '--execute'])

    assert exit_code == 0
    assert len(fake.executed) == 1
    assert fake.disposed is True
    assert "(42,)" in capsys.readouterr().out.splitlines()


@pytest.mark.integration
def test_main_log_level(request_file, restore_root_logger):
    """Test --log-level reconfigures the root logger."""
    with patch('main.setup_logging') as mock_setup:
        exit_code = main([str(request_file(DROP_REQUEST)), '--log-level', 'debug'])

    assert exit_code == 0
    mock_setup.assert_called_once_with(log_level='DEBUG')


@pytest.mark.integration
def test_main_keyboard_interrupt(request_file):
    """Test interruption exits with 130."""
    with patch.object(SynthesisRunner, 'run', side_effect=KeyboardInterrupt):
        exit_code = main([str(request_file(DROP_REQUEST))])

    assert exit_code == 130


@pytest.mark.integration
def test_parser_rejects_unknown_level():
    """Test argparse refuses unknown log levels."""
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(['request.json', '--log-level', 'LOUD'])

    assert exc_info.value.code == 2


# ====================
# 3. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_run_failed_render(request_file, capsys):
    """Test a failed render prints its reason to stderr and no SQL."""
    exit_code = SynthesisRunner().run(request_file({'operation': 'DROP_TABLE', 'table': ''}))

    captured = capsys.readouterr()
    assert exit_code == EXIT_FAILURE
    assert captured.err.strip() == "empty_table_name: Table name must not be empty"
    assert "DROP TABLE" not in captured.out


@pytest.mark.edge_case
def test_run_invalid_request(request_file, capsys):
    """Test a malformed document reports invalid_request."""
    exit_code = SynthesisRunner().run(request_file({'operation': 'MERGE'}))

    assert exit_code == EXIT_FAILURE
    assert capsys.readouterr().err.startswith("invalid_request: Unknown operation")


@pytest.mark.edge_case
def test_run_missing_file(tmp_path, capsys):
    """Test a missing file exits 1."""
    exit_code = SynthesisRunner().run(tmp_path / 'missing.json')

    assert exit_code == EXIT_FAILURE
    assert "Cannot read request file" in capsys.readouterr().err


@pytest.mark.edge_case
def test_run_database_error(request_file, capsys):
    """Test database errors exit 1 after the SQL was printed."""
    error = OperationalError("DROP TABLE t;", {}, Exception("no such table"))
    provider = FakeProvider(error=error)

    exit_code = SynthesisRunner(provider=provider).run(request_file(DROP_REQUEST), execute=True)

    assert exit_code == EXIT_FAILURE
    assert len(provider.executed) == 1
    assert "DROP TABLE t;" in capsys.readouterr().out.splitlines()


@pytest.mark.edge_case
def test_failed_render_is_never_executed(request_file):
    """Test a failed render never reaches the provider."""
    provider = FakeProvider()

    SynthesisRunner(provider=provider).run(request_file({'operation': 'DROP_TABLE'}), execute=True)

    assert provider.executed == []


# ===============
# 4. SMOKE TESTS
# ===============

@pytest.mark.smoke
def test_persons_table_end_to_end(request_file, capsys):
    """Test a full CREATE TABLE request with every constraint kind."""
    path = request_file({
        'operation': 'CREATE_TABLE',
        'table': 'Persons',
        'columns': [
            {'name': 'ID', 'type': 'INT', 'constraints': ['not_null', {'auto_increment': 100}, 'primary_key']},
            {'name': 'LastName', 'type': 'VARCHAR', 'range': 255, 'constraints': ['not_null', 'unique']},
            {'name': 'Age', 'type': 'INT',
             'constraints': [{'check': [{'field': 'Age', 'operator': '>=', 'value': 18}]}]},
        ],
    })

    exit_code = main([str(path)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "CREATE TABLE Persons (" in out
    assert "PRIMARY KEY(ID)" in out
    assert "CHECK(Age>=18)" in out
