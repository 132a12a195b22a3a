import pytest


@pytest.fixture
def workload_file(tmp_path):
    """ Write a workload file and return its path """
    def write(*lines, header="Tasks: (arrival, computation, deadline, context)"):
        path = tmp_path / "workload.txt"
        path.write_text("\n".join((header,) + lines) + "\n")
        return str(path)
    return write
