import json

from subtake.utils.output_utils import build_record, format_result, is_json_output, report


def test_format_result():
    assert format_result("SHOPIFY", "shop.example.com") == "[VULNERABLE:SHOPIFY] shop.example.com\n"
    assert format_result("", "www.example.com") == "[NOT_VULNERABLE] www.example.com\n"


def test_is_json_output():
    assert is_json_output("results.json")
    assert is_json_output("RESULTS.JSON")
    assert not is_json_output("results.txt")
    assert not is_json_output(None)


def test_build_record_splits_domain_verdicts():
    assert build_record("DOMAIN_AVAILABLE:old-brand.io", "Promo.Example.com") == {
        'subdomain': "promo.example.com", 'vulnerable': True,
        'service': "DOMAIN_AVAILABLE", 'domain': "old-brand.io",
    }
    assert build_record("GITHUB", "docs.example.com") == {'subdomain': "docs.example.com", 'vulnerable': True, 'service': "GITHUB"}
    assert build_record("", "www.example.com") == {'subdomain': "www.example.com", 'vulnerable': False, 'service': ""}


def test_report_vulnerable_to_text_file(tmp_path, capsys):
    out = tmp_path / "results.txt"
    report("SHOPIFY", "shop.example.com", str(out))
    report("GITHUB", "docs.example.com", str(out))
    assert capsys.readouterr().out == "[VULNERABLE:SHOPIFY] shop.example.com\n[VULNERABLE:GITHUB] docs.example.com\n"
    assert out.read_text() == "[VULNERABLE:SHOPIFY] shop.example.com\n[VULNERABLE:GITHUB] docs.example.com\n"


def test_report_not_vulnerable_only_when_verbose(tmp_path, capsys):
    out = tmp_path / "results.txt"
    report("", "www.example.com", str(out))
    assert capsys.readouterr().out == ""
    assert not out.exists()

    report("", "www.example.com", str(out), verbose=True)
    assert capsys.readouterr().out == "[NOT_VULNERABLE] www.example.com\n"
    assert out.read_text() == "[NOT_VULNERABLE] www.example.com\n"


def test_report_appends_to_json_array(tmp_path, capsys):
    out = tmp_path / "results.json"
    report("SHOPIFY", "shop.example.com", str(out))
    report("DOMAIN_DEAD:legacy.cdn-gone.net", "cdn.example.com", str(out))
    report("", "www.example.com", str(out), verbose=True)

    assert json.loads(out.read_text()) == [
        {'subdomain': "shop.example.com", 'vulnerable': True, 'service': "SHOPIFY"},
        {'subdomain': "cdn.example.com", 'vulnerable': True, 'service': "DOMAIN_DEAD", 'domain': "legacy.cdn-gone.net"},
        {'subdomain': "www.example.com", 'vulnerable': False, 'service': ""},
    ]


def test_report_json_does_not_clobber_foreign_file(tmp_path, capsys):
    out = tmp_path / "results.json"
    out.write_text('{"not": "a list"}')
    report("SHOPIFY", "shop.example.com", str(out))
    assert json.loads(out.read_text()) == {"not": "a list"}
