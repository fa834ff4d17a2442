from unittest.mock import MagicMock, patch

import requests

from subpanel.core import restart
from subpanel.core.restart import RestartFlag, RestartScheduler


def test_flag_check_and_clear():
    flag = RestartFlag()
    assert flag.is_need_restart_and_set_false() is False
    flag.set_need_restart()
    flag.set_need_restart()
    assert flag.is_need_restart_and_set_false() is True
    assert flag.is_need_restart_and_set_false() is False


def test_check_and_restart_skips_when_not_flagged():
    scheduler = RestartScheduler(flag=RestartFlag(), token="tok")
    with patch("subpanel.core.restart.restart_xray") as mock_restart:
        assert scheduler.check_and_restart() is None
    mock_restart.assert_not_called()


def test_check_and_restart_when_flagged():
    flag = RestartFlag()
    flag.set_need_restart()
    scheduler = RestartScheduler(flag=flag, token="tok")
    with patch("subpanel.core.restart.restart_xray", return_value={"status": "success"}) as mock_restart:
        assert scheduler.check_and_restart() == {"status": "success"}
    mock_restart.assert_called_once_with("tok")
    assert flag.is_need_restart_and_set_false() is False


def test_check_and_restart_logs_failure():
    flag = RestartFlag()
    flag.set_need_restart()
    scheduler = RestartScheduler(flag=flag, token="tok")
    with patch("subpanel.core.restart.restart_xray", return_value={"status": "error", "message": "x"}):
        assert scheduler.check_and_restart()["status"] == "error"


def test_restart_xray():
    with patch.object(restart.api_session, "post", return_value=MagicMock(status_code=200)) as mock_post:
        assert restart.restart_xray("tok") == {"status": "success"}
    assert mock_post.call_args[0][0].endswith("/xray/restart")

    failing = MagicMock(status_code=503)
    failing.raise_for_status.side_effect = requests.exceptions.HTTPError("503")
    with patch.object(restart.api_session, "post", return_value=failing):
        result = restart.restart_xray("tok")
    assert result["status"] == "error"
    assert "503" in result["message"]

    with patch.object(restart.api_session, "post", side_effect=requests.exceptions.Timeout("slow")):
        assert restart.restart_xray("tok")["status"] == "error"


def test_scheduler_registers_interval_job():
    scheduler = RestartScheduler(flag=RestartFlag(), token="tok", interval_seconds=10)
    scheduler.start()
    try:
        job = scheduler.scheduler.get_job("xray_restart_check")
        assert job is not None
        assert job.trigger.interval.total_seconds() == 10
    finally:
        scheduler.stop()
    assert not scheduler.scheduler.running
