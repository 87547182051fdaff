from bhashaantar.settings import load_settings

_ENV_NAMES = (
    "ASR_PROVIDER",
    "ASR_MAX_BYTES",
    "ASR_LANGUAGE",
    "ASR_REQUEST_TIMEOUT",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "ENABLE_ENHANCEMENT",
    "PIPELINE_STEP_TIMEOUT_SECONDS",
    "PORT",
)


def _clear(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults(monkeypatch):
    _clear(monkeypatch)

    cfg = load_settings()

    assert cfg.asr.provider == "openai-transcribe"
    assert cfg.asr.language == "hi"
    assert cfg.asr.max_bytes == 10 * 1024 * 1024
    assert cfg.asr.request_timeout == 30.0
    assert cfg.llm.model == "gpt-4o-mini"
    assert cfg.pipeline.enhance_enabled is True
    assert cfg.pipeline.step_timeout_seconds == 60.0
    assert cfg.server.port == 8200


def test_load_settings_reads_environment(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("ASR_PROVIDER", "openai-audio-chat")
    monkeypatch.setenv("ASR_MAX_BYTES", "1024")
    monkeypatch.setenv("ENABLE_ENHANCEMENT", "off")
    monkeypatch.setenv("PIPELINE_STEP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ASR_REQUEST_TIMEOUT", "15")

    cfg = load_settings()

    assert cfg.asr.provider == "openai-audio-chat"
    assert cfg.asr.max_bytes == 1024
    assert cfg.pipeline.enhance_enabled is False
    assert cfg.pipeline.step_timeout_seconds == 2.5
    assert cfg.asr.request_timeout == 15.0


def test_load_settings_ignores_malformed_numbers(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("PORT", "eighty")
    monkeypatch.setenv("LLM_TEMPERATURE", "warm")

    cfg = load_settings()

    assert cfg.server.port == 8200
    assert cfg.llm.temperature == 0.2
