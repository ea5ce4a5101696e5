import pytest

SIZES = "chr1 1000\nchr2 500\n"

CYTOBANDS = "\n".join([
    "chr1\t0\t100\tp12\tgneg",
    "chr1\t100\t120\tp11\tacen",
    "chr1\t120\t400\tq11\tgpos50",
    "chr1\t400\t600\tq12\tgvar",
    "chr1\t600\t1000\tq13\tstalk",
    "chr2\t0\t300\tp11\tgpos100",
    "chr2\t300\t500\tq11\tgneg",
]) + "\n"


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def sizes_file(write_file):
    return write_file("test.chrom.sizes", SIZES)


@pytest.fixture
def cytoband_file(write_file):
    return write_file("test.cytoBandIdeo.txt", CYTOBANDS)


@pytest.fixture
def bed_file(write_file):
    return write_file("peaks.bed", "chr1\t250\t350\tpeak1\t0\t+\nchr2\t0\t50\tpeak2\t0\t-\nchrZ\t0\t10\tlost\t0\t+\n")
