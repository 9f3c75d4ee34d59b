from pytest_mock import MockerFixture

from simplehttp.configs import PushSettings
from simplehttp.main import main


async def test_main_logs_version(mocker: MockerFixture) -> None:
    settings = PushSettings(
        send_push_notifications=True, push_notification_server="https://push.example.com"
    )
    mocker.patch("simplehttp.main.load_push_settings", return_value=settings)
    mock_get = mocker.patch("simplehttp.main.get_push_proxy_version", return_value="5.37.0")
    mock_info = mocker.patch("simplehttp.main.logger.info")

    await main()

    mock_get.assert_awaited_once_with(settings)
    mock_info.assert_called_with("Push proxy version: 5.37.0")


async def test_main_warns_when_unavailable(mocker: MockerFixture) -> None:
    mocker.patch("simplehttp.main.load_push_settings", return_value=PushSettings())
    mocker.patch("simplehttp.main.get_push_proxy_version", return_value="")
    mock_warning = mocker.patch("simplehttp.main.logger.warning")

    await main()

    mock_warning.assert_called_once_with("Push proxy version is unavailable")
