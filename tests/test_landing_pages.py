import pytest
from pydantic import ValidationError

from checkout_adapter.api.landing_page import LandingKind, app_redirect_url, render_landing_page
from checkout_adapter.utils.config_loader import DEFAULT_CONFIG_PATH, LandingConfig, load_landing_config


def test_redirect_urls():
    assert app_redirect_url(LandingKind.SUCCESS, "myapp", "cs_1") == "myapp://payment-success?session_id=cs_1"
    assert app_redirect_url(LandingKind.SUCCESS, "myapp") == "myapp://payment-success"
    assert app_redirect_url(LandingKind.CANCEL, "myapp", "cs_1") == "myapp://payment-cancel"


def test_both_kinds_share_one_template():
    config = LandingConfig(redirect_delay_seconds=3)

    success = render_landing_page(LandingKind.SUCCESS, config, "cs_1")
    cancel = render_landing_page(LandingKind.CANCEL, config)

    assert 'data-kind="success"' in success
    assert 'data-kind="cancel"' in cancel
    assert '<span id="countdown">3</span>' in success
    assert "var remaining = 3;" in cancel
    assert config.success.gradient_start in success
    assert config.cancel.gradient_start in cancel


def test_success_page_without_session_id_hides_session_box():
    html = render_landing_page(LandingKind.SUCCESS, LandingConfig(), None)
    assert "Session:" not in html


def test_default_config_file_loads():
    assert DEFAULT_CONFIG_PATH.exists()
    config = load_landing_config()
    assert config.app_url_scheme == "checkoutapp"
    assert config.success.heading == "Payment Successful!"


def test_custom_config_and_scheme_override(tmp_path):
    path = tmp_path / "landing.yml"
    path.write_text(
        "app_url_scheme: fitnessapp\nredirect_delay_seconds: 3\n",
        encoding="utf-8",
    )

    assert load_landing_config(path).app_url_scheme == "fitnessapp"
    assert load_landing_config(path, app_url_scheme="OtherApp://").app_url_scheme == "otherapp"
    assert load_landing_config(path).cancel.heading == "Payment Cancelled"


def test_explicit_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_landing_config(tmp_path / "missing.yml")


@pytest.mark.parametrize("scheme", ["my app", "1app", "javascript:alert(1)"])
def test_invalid_scheme_rejected(scheme):
    with pytest.raises(ValidationError):
        LandingConfig(app_url_scheme=scheme)
