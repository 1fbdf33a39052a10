"""
Tests for workflow commands and run states.
"""

import pytest


class TestWorkflowCommands:
    """Tests for core.workflow."""

    def test_group(self, capsys):
        from hosting_deploy.core.workflow import group

        with group("Setting up CLI credentials"):
            print("inside")

        assert capsys.readouterr().out == "::group::Setting up CLI credentials\ninside\n::endgroup::\n"

    def test_group_closed_on_error(self, capsys):
        from hosting_deploy.core.workflow import group

        with pytest.raises(RuntimeError):
            with group("Deploying"):
                raise RuntimeError("boom")

        assert capsys.readouterr().out.endswith("::endgroup::\n")

    def test_set_failed_escapes_newlines(self, capsys):
        from hosting_deploy.core.workflow import set_failed

        set_failed("line one\nline two 100%")

        assert capsys.readouterr().out == "::error::line one%0Aline two 100%25\n"

    def test_set_output_writes_file(self, tmp_path):
        """Test outputs use the delimiter syntax and JSON for lists."""
        from hosting_deploy.core.workflow import set_output

        output_file = tmp_path / "output"
        set_output("urls", ["https://a.web.app", "https://b.web.app"], str(output_file))
        set_output("details_url", "https://a.web.app", str(output_file))

        lines = output_file.read_text().splitlines()
        assert lines[0].startswith("urls<<ghadelimiter_")
        assert lines[1] == '["https://a.web.app", "https://b.web.app"]'
        assert lines[2] == lines[0].split("<<", 1)[1]
        assert lines[3].startswith("details_url<<")
        assert lines[4] == "https://a.web.app"

    def test_set_output_without_file_logs(self, caplog):
        from hosting_deploy.core.workflow import set_output

        with caplog.at_level("INFO"):
            set_output("details_url", "https://a.web.app", "")

        assert "details_url=https://a.web.app" in caplog.text


class TestRunStates:
    """Tests for core.states transitions."""

    def test_forward_sequence(self):
        from hosting_deploy.core.states import DEFAULT_STATE_SEQUENCE, is_valid_transition

        for current, new in zip(DEFAULT_STATE_SEQUENCE, DEFAULT_STATE_SEQUENCE[1:]):
            assert is_valid_transition(current, new)

    def test_skipping_a_state_is_invalid(self):
        from hosting_deploy.core.states import RunState, is_valid_transition

        assert not is_valid_transition(RunState.INIT, RunState.DEPLOYING)
        assert not is_valid_transition(RunState.DEPLOYING, RunState.AUTHENTICATING)

    def test_failure_from_any_active_state(self):
        from hosting_deploy.core.states import RunState, is_valid_transition

        for state in (RunState.INIT, RunState.VERIFYING, RunState.DEPLOYING, RunState.REPORTING_SUCCESS):
            assert is_valid_transition(state, RunState.REPORTING_FAILURE)

    def test_failure_only_leads_to_done(self):
        from hosting_deploy.core.states import RunState, is_valid_transition

        assert is_valid_transition(RunState.REPORTING_FAILURE, RunState.DONE)
        assert not is_valid_transition(RunState.REPORTING_FAILURE, RunState.REPORTING_SUCCESS)
        assert not is_valid_transition(RunState.REPORTING_FAILURE, RunState.REPORTING_FAILURE)

    def test_done_is_terminal(self):
        from hosting_deploy.core.states import RunState, is_valid_transition

        assert RunState.DONE.is_terminal
        assert not is_valid_transition(RunState.DONE, RunState.REPORTING_FAILURE)
