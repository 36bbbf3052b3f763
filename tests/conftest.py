import json
from unittest.mock import MagicMock

import pytest

SAMPLE_STATUS_0 = {
    "Status": {
        "Module": 1,
        "DeviceName": "lamp",
        "FriendlyName": ["Lamp"],
        "Topic": "tasmota_lamp",
        "Power": 1,
        "PowerOnState": 3,
        "LedState": 1,
    },
    "StatusPRM": {"Baudrate": 115200, "Uptime": "0T01:02:03", "BootCount": 7},
    "StatusFWR": {"Version": "13.1.0(tasmota)", "Hardware": "ESP8266EX"},
    "StatusNET": {"Hostname": "lamp-1234", "IPAddress": "192.168.1.50", "WifiPower": 17.0},
    "StatusMQT": {"MqttHost": "broker", "MqttPort": 1883},
    "StatusTIM": {"UTC": "2024-01-01T00:00:00", "Timezone": 99},
    "StatusSTS": {"POWER": "ON", "Wifi": {"AP": 1, "SSId": "home", "RSSI": 80}},
    "StatusNEW": {"SomethingAdded": True},
}


def timer(enable=1, mode=0, time="07:30", window=0, days="0111110", repeat=1, output=1, action=1):
    return {
        "Enable": enable,
        "Mode": mode,
        "Time": time,
        "Window": window,
        "Days": days,
        "Repeat": repeat,
        "Output": output,
        "Action": action,
    }


def sample_timers():
    data = {"Timers": "ON"}
    for i in range(1, 17):
        data[f"Timer{i}"] = timer(enable=0, time="00:00", days="0000000", repeat=0, action=0)
    data["Timer1"] = timer()
    data["Timer2"] = timer(time="22:15", action=0)
    return data


def make_response(status=200, body=b"{}"):
    if not isinstance(body, bytes):
        body = json.dumps(body).encode()
    resp = MagicMock()
    resp.status_code = status
    resp.content = body
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


@pytest.fixture
def session():
    s = MagicMock()
    s.request.return_value = make_response(200, {"POWER": "ON"})
    return s


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[devices]\n'
        'lamp = "192.168.1.50"\n'
        'heater = "heater.local"\n'
        '\n'
        '[http]\n'
        'timeout = 2.5\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TASCLI_CONFIG", raising=False)
    monkeypatch.delenv("TASCLI_TIMEOUT", raising=False)
