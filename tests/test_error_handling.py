"""
Tests for error policies and the loader configuration.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from divetreelib import (
    CollectErrorsPolicy,
    ContentLoadError,
    ContinueOnErrorsPolicy,
    FailFastPolicy,
    LoaderConfig,
    ThresholdPolicy,
    UnknownEntryError,
)
from divetreelib.error_policies import error_count
from divetreelib.errors import (
    BranchNotFoundError,
    DiveLoadError,
    ErrorThresholdExceeded,
    RepositoryOpenError,
    TreePeelError,
)


class TestErrorPolicies:
    """Test individual error policy behaviors."""

    def test_fail_fast_policy(self):
        """FailFastPolicy should re-raise any error."""
        with pytest.raises(ContentLoadError):
            FailFastPolicy().handle(ContentLoadError("Unable to read dive file"), Mock())

    def test_continue_on_errors_policy(self, capsys):
        """ContinueOnErrorsPolicy should record, warn on stderr and continue."""
        policy = ContinueOnErrorsPolicy()
        policy.handle(ContentLoadError("Unable to read dive file", path="2019/05/x/Dive"))

        assert len(policy.errors) == 1
        assert policy.unreadable_paths == ["2019/05/x/Dive"]
        assert "WARNING: Unable to read dive file" in capsys.readouterr().err

    def test_continue_quietly(self, capsys):
        policy = ContinueOnErrorsPolicy(verbose=False)
        policy.handle(UnknownEntryError("2019/", "README"))
        assert capsys.readouterr().err == ""
        stats = policy.get_statistics()
        assert stats['total_errors'] == 1
        assert stats['unknown_files'] == 1
        assert stats['unreadable'] == 0

    def test_path_falls_back_to_node(self):
        policy = CollectErrorsPolicy()
        policy.handle(RuntimeError("boom"), Mock(path="2019/05/Dive"))
        assert policy.errors[0]['path'] == "2019/05/Dive"
        assert policy.errors[0]['error_type'] == "RuntimeError"

    def test_collect_errors_policy(self, capsys):
        """CollectErrorsPolicy should collect all errors silently."""
        policy = CollectErrorsPolicy()
        policy.handle(UnknownEntryError("", "README"))
        policy.handle(ContentLoadError("Unable to read trip file"))

        assert len(policy.errors) == 2
        assert any(e['error_type'] == 'UnknownEntryError' for e in policy.errors)
        assert any(e['error_type'] == 'ContentLoadError' for e in policy.errors)
        assert capsys.readouterr().err == ""

    def test_threshold_policy(self):
        """ThresholdPolicy should fail after threshold."""
        policy = ThresholdPolicy(max_errors=2, verbose=False)
        policy.handle(UnknownEntryError("", "a"))
        policy.handle(UnknownEntryError("", "b"))

        with pytest.raises(ErrorThresholdExceeded, match="threshold exceeded") as info:
            policy.handle(UnknownEntryError("", "c"))
        assert policy.error_count == 3
        assert isinstance(info.value, DiveLoadError)
        assert isinstance(info.value, RuntimeError)
        assert info.value.fatal
        assert isinstance(info.value.__cause__, UnknownEntryError)

    def test_error_count(self):
        assert error_count(None) == 0
        assert error_count(FailFastPolicy()) == 0
        policy = CollectErrorsPolicy()
        policy.handle(ContentLoadError("x"))
        assert error_count(policy) == 1
        threshold = ThresholdPolicy(verbose=False)
        threshold.handle(ContentLoadError("x"))
        assert error_count(threshold) == 1


class TestErrors:

    def test_fatal_errors(self):
        assert RepositoryOpenError("/repo", "main").fatal
        assert BranchNotFoundError("main").fatal
        assert TreePeelError("main").fatal
        assert not ContentLoadError("x").fatal
        assert not UnknownEntryError("", "x").fatal

    def test_messages(self):
        assert str(RepositoryOpenError("/repo", "main")) == \
            "Unable to open git repository at '/repo' (branch 'main')"
        assert str(BranchNotFoundError("main")) == "Unable to look up branch 'main'"
        assert str(TreePeelError("main")) == "Could not look up tree of branch 'main'"

    def test_messages_name_head_without_branch(self):
        assert str(BranchNotFoundError(None)) == "Unable to look up branch 'HEAD'"
        assert str(TreePeelError(None)) == "Could not look up tree of branch 'HEAD'"
        assert str(RepositoryOpenError("/repo")) == \
            "Unable to open git repository at '/repo' (branch 'HEAD')"
        assert BranchNotFoundError(None).branch is None
        assert str(UnknownEntryError("2019/05/", "README")) == "Unknown file 2019/05/README (None None)"

    def test_all_derive_from_base(self):
        for error in (RepositoryOpenError("/r"), BranchNotFoundError(None),
                      TreePeelError(None), ContentLoadError("x"), UnknownEntryError("", "x")):
            assert isinstance(error, DiveLoadError)


class TestLoaderConfig:

    def test_defaults_are_valid(self):
        config = LoaderConfig()
        assert config.validate() == []
        config.check()

    def test_invalid_values(self):
        config = LoaderConfig(git_executable=" ", max_depth=-1, default_branch="")
        errors = config.validate()
        assert len(errors) == 3
        with pytest.raises(ValueError, match="Invalid configuration"):
            config.check()

    def test_policy_selection(self):
        assert isinstance(LoaderConfig(strict=True).make_policy(), FailFastPolicy)
        policy = LoaderConfig(verbose=False).make_policy()
        assert isinstance(policy, ContinueOnErrorsPolicy)
        assert not policy.verbose
