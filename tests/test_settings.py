from copapro import settings


def test_int_env_default_when_unset(monkeypatch):
    monkeypatch.delenv("COPAPRO_TEST_VALUE", raising=False)
    assert settings._int_env("COPAPRO_TEST_VALUE", 7) == 7


def test_int_env_reads_value(monkeypatch):
    monkeypatch.setenv("COPAPRO_TEST_VALUE", " 9 ")
    assert settings._int_env("COPAPRO_TEST_VALUE", 7) == 9


def test_blank_value_falls_back(monkeypatch):
    monkeypatch.setenv("COPAPRO_TEST_VALUE", "")
    assert settings._int_env("COPAPRO_TEST_VALUE", 2) == 2
