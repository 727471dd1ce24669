from click.testing import CliRunner

from dockremote.CLI.main import cli


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'Validate a container spec file' in result.output


def test_check_prints_summary(tmp_path):
    spec_file = tmp_path / "web.yml"
    spec_file.write_text(
        "image: nginx:${TAG}\n"
        "command: [nginx, -g, 'daemon off;']\n"
        "environment: {TZ: UTC}\n"
        "exposed_ports: [80/tcp]\n"
        "host:\n"
        "  port_bindings: {80/tcp: [8080]}\n"
        "  volume_bindings: ['/srv:/usr/share/nginx/html:ro']\n"
        "  links: ['db:database']\n"
        "  restart_policy: on-failure:2\n"
    )
    (tmp_path / "web.env").write_text("TAG=1.25\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['check', str(spec_file), '--env-file', 'web.env'])

    assert result.exit_code == 0, result.output
    assert 'nginx:1.25' in result.output
    assert 'TZ=UTC' in result.output
    assert '80/tcp -> 0.0.0.0:8080' in result.output
    assert '/srv:/usr/share/nginx/html:ro' in result.output
    assert 'db:database' in result.output
    assert 'on-failure:2' in result.output


def test_check_reports_errors(tmp_path):
    spec_file = tmp_path / "bad.yml"
    spec_file.write_text("image: app\nexposed_ports: [80/sctp]\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['check', str(spec_file)])

    assert result.exit_code == 1
    assert "Error: exposed_ports[0]: Invalid port '80/sctp'" in result.output


def test_check_missing_file():
    runner = CliRunner()
    result = runner.invoke(cli, ['check', 'non_existent.yml'])
    assert result.exit_code != 0


def test_parse_valid_values():
    runner = CliRunner()
    result = runner.invoke(cli, ['parse', 'port', '8080/tcp'])
    assert result.exit_code == 0
    assert result.output.startswith('8080/tcp -> TcpPort(port=8080)')

    result = runner.invoke(cli, ['parse', 'volume', '/host:/container:ro'])
    assert result.exit_code == 0
    assert 'rw=False' in result.output

    result = runner.invoke(cli, ['parse', 'image', 'localhost:5000/app'])
    assert result.exit_code == 0
    assert result.output.startswith('localhost:5000/app:latest')


def test_parse_invalid_value():
    runner = CliRunner()
    result = runner.invoke(cli, ['parse', 'link', 'a:b:c'])
    assert result.exit_code == 1
    assert 'Invalid link: a:b:c' in result.output
