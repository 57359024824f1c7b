import pytest

from greencert.constants import CertificationTier
from greencert.shared.certificates import TemplateUnavailableError


def test_default_configuration(make_app):
    application = make_app()
    table = application.config["CERT_TIER_TABLE"]
    assert table.classify(40) is CertificationTier.BRONZE
    assert application.config["CERT_ELIGIBILITY_MIN"] == 40
    assert application.config["CERT_FONT_NAME"] == "Helvetica-Bold"
    assert "certificate_template" in application.extensions


def test_explicit_thresholds_override_scheme(make_app):
    application = make_app(
        CERT_TIER_SCHEME="six_tier", CERT_TIER_THRESHOLDS="Bronze:30,Gold:75"
    )
    table = application.config["CERT_TIER_TABLE"]
    assert table.classify(29) is CertificationTier.NOT_CERTIFIED
    assert table.classify(60) is CertificationTier.BRONZE
    assert table.classify(75) is CertificationTier.GOLD


@pytest.mark.parametrize(
    "env",
    [
        {"CERT_TIER_SCHEME": "diamond"},
        {"CERT_TIER_THRESHOLDS": "Gold:50,Silver:60"},
        {"CERT_ELIGIBILITY_MIN": "forty"},
        {"CERT_ELIGIBILITY_MIN": "140"},
    ],
)
def test_invalid_configuration_fails_startup(make_app, env):
    with pytest.raises(ValueError):
        make_app(**env)


def test_missing_template_fails_startup(make_app, tmp_path, caplog):
    with pytest.raises(TemplateUnavailableError):
        make_app(CERT_TEMPLATE_PATH=str(tmp_path / "nope.pdf"))
    assert "[CERT-TEMPLATE]" in caplog.text
