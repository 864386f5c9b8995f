"""Tests for configuration, g2o I/O and the command line tool."""

import pytest
from conftest import GROUND_TRUTH, wrapped

from lago.cli import default_output_path, main
from lago.utils.config import ANCHOR_KEY, ANCHOR_VARIANCE, LagoParams, parse_args
from lago.utils.io import load_g2o

SQUARE_G2O = """VERTEX_SE2 0 0 0 0
VERTEX_SE2 1 1 1 0
VERTEX_SE2 2 0 2 0
VERTEX_SE2 3 -1 1 0
EDGE_SE2 0 1 1 1 1.5707963 100 0 0 100 0 100
EDGE_SE2 1 2 1 1 1.5707963 100 0 0 100 0 100
EDGE_SE2 2 3 1 1 1.5707963 100 0 0 100 0 100
EDGE_SE2 2 0 0 2 -3.1415926 100 0 0 100 0 100
EDGE_SE2 0 3 -1 1 -1.5707963 100 0 0 100 0 100
"""

# Same loop with pose ids starting at 1
SQUARE_ONE_BASED_G2O = """VERTEX_SE2 1 0 0 0
VERTEX_SE2 2 1 1 0
VERTEX_SE2 3 0 2 0
VERTEX_SE2 4 -1 1 0
EDGE_SE2 1 2 1 1 1.5707963 100 0 0 100 0 100
EDGE_SE2 2 3 1 1 1.5707963 100 0 0 100 0 100
EDGE_SE2 3 4 1 1 1.5707963 100 0 0 100 0 100
EDGE_SE2 3 1 0 2 -3.1415926 100 0 0 100 0 100
EDGE_SE2 1 4 -1 1 -1.5707963 100 0 0 100 0 100
"""


@pytest.fixture
def square_g2o(tmp_path):
    """Square loop dataset with zero initial headings."""
    path = tmp_path / "square.g2o"
    path.write_text(SQUARE_G2O)
    return path


@pytest.fixture
def square_one_based_g2o(tmp_path):
    """Square loop dataset whose pose ids start at 1."""
    path = tmp_path / "square_one_based.g2o"
    path.write_text(SQUARE_ONE_BASED_G2O)
    return path


class TestConfig:
    """Test configuration objects."""

    def test_default_params(self) -> None:
        """Test default parameters."""
        params = LagoParams()

        assert params.anchor_key == ANCHOR_KEY
        assert params.anchor_variance == ANCHOR_VARIANCE == 1e-8

    def test_invalid_anchor_variance(self) -> None:
        """Test that the anchor variance must be positive."""
        with pytest.raises(ValueError, match="must be positive"):
            LagoParams(anchor_variance=0.0)

    def test_params_are_immutable(self) -> None:
        """Test that parameters cannot be changed after creation."""
        params = LagoParams()
        with pytest.raises(AttributeError):
            params.anchor_variance = 1.0

    def test_parse_args_defaults(self) -> None:
        """Test command line defaults."""
        args = parse_args(["input.g2o"])

        assert args.input == "input.g2o"
        assert args.output is None
        assert args.prior_key is None
        assert not args.refine
        assert args.optimizer == "LevenbergMarquardt"
        assert args.anchor_variance == ANCHOR_VARIANCE


class TestIO:
    """Test g2o loading."""

    def test_load_g2o(self, square_g2o) -> None:
        """Test reading vertices and edges."""
        graph, initial = load_g2o(square_g2o)

        assert graph.size() == 5
        assert initial.size() == 4
        assert initial.atPose2(2).x() == pytest.approx(0.0)
        assert initial.atPose2(2).y() == pytest.approx(2.0)

    def test_missing_file(self, tmp_path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_g2o(tmp_path / "missing.g2o")


class TestCli:
    """Test the lago-init command."""

    def test_default_output_path(self, tmp_path) -> None:
        """Test the output file name derived from the input."""
        assert default_output_path(tmp_path / "city.g2o") == tmp_path / "city_lago.g2o"

    @pytest.mark.parametrize("refine", [False, True])
    def test_initializes_headings(self, square_g2o, tmp_path, refine) -> None:
        """Test headings written by the command match the ground truth."""
        output = tmp_path / "out.g2o"
        argv = [str(square_g2o), "--output", str(output)]
        if refine:
            argv.append("--refine")

        assert main(argv) == 0
        assert output.exists()

        _, estimate = load_g2o(output)
        for key, pose in GROUND_TRUTH.items():
            result = estimate.atPose2(key)
            assert wrapped(result.theta() - pose.theta()) == pytest.approx(0.0, abs=1e-4)
            if not refine:
                assert result.x() == pytest.approx(pose.x())
                assert result.y() == pytest.approx(pose.y())

    def test_missing_input(self, tmp_path) -> None:
        """Test that a missing input file is reported with exit code 1."""
        assert main([str(tmp_path / "missing.g2o")]) == 1

    def test_one_based_pose_ids(self, square_one_based_g2o, tmp_path) -> None:
        """Test the origin prior goes on the smallest pose key by default."""
        output = tmp_path / "out.g2o"

        assert main([str(square_one_based_g2o), "-o", str(output)]) == 0

        _, estimate = load_g2o(output)
        for key, pose in GROUND_TRUTH.items():
            result = estimate.atPose2(key + 1)
            assert wrapped(result.theta() - pose.theta()) == pytest.approx(0.0, abs=1e-4)

    def test_explicit_prior_key(self, square_one_based_g2o, tmp_path) -> None:
        """Test a prior key given on the command line."""
        output = tmp_path / "out.g2o"

        argv = [str(square_one_based_g2o), "-o", str(output), "--prior-key", "3"]
        assert main(argv) == 0

        _, estimate = load_g2o(output)
        # Pose 3 is pinned at heading zero, so every heading shifts by -pi
        for key, pose in GROUND_TRUTH.items():
            result = estimate.atPose2(key + 1)
            expected = pose.theta() - GROUND_TRUTH[2].theta()
            assert wrapped(result.theta() - expected) == pytest.approx(0.0, abs=1e-4)

    def test_unknown_prior_key(self, square_one_based_g2o, tmp_path) -> None:
        """Test that a prior key absent from the dataset is reported."""
        output = tmp_path / "out.g2o"

        assert main([str(square_one_based_g2o), "-o", str(output), "--prior-key", "0"]) == 1
        assert not output.exists()
