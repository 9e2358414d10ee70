import io

import pytest
from rich.console import Console


# hookwrapper=True allows us to wrap the execution and access the result
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Extends the test report with the test docstring on failure.
    """
    outcome = yield
    rep = outcome.get_result()

    # We only care about the actual test execution (call), not setup or teardown
    if rep.when == "call" and rep.failed:
        doc = item.obj.__doc__
        if doc:
            from inspect import cleandoc
            rep.sections.append(("Test Description", cleandoc(doc)))


@pytest.fixture
def console() -> Console:
    """Console writing plain text into a buffer, read back with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the home directory and config env vars at a temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("PUNCHER_CONFIG", raising=False)
    monkeypatch.delenv("KIHO_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def scripted_input():
    """Build a line reader that answers prompts from a list and records them."""
    def factory(*answers: str):
        remaining = list(answers)
        prompts: list[str] = []

        def read_line(prompt: str) -> str:
            prompts.append(prompt)
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        read_line.prompts = prompts
        return read_line

    return factory
