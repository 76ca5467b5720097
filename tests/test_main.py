"""Tests for the command line entry point."""

import pytest

from brokermeta import main as cli
from brokermeta.errors import MetadataRequestError
from brokermeta.metadata import Broker, MetadataResponse, Partition, Topic
from brokermeta.utils.config import reset_config


def make_response():
    return MetadataResponse(
        cluster_id="cluster-1",
        controller_id=2,
        brokers=[
            Broker(node_id=2, host="broker-2", port=9092),
            Broker(node_id=1, host="broker-1", port=9092, rack="rack-a"),
        ],
        topics=[
            Topic("topic1", partitions=[
                Partition(1, 2, replicas=[2, 3, 1]),
                Partition(0, 1, replicas=[1, 2, 3]),
            ]),
            Topic("__consumer_offsets", is_internal=True, partitions=[
                Partition(0, 1, replicas=[1]),
            ]),
        ],
    )


class FetchRecorder:
    """Replaces MetadataClient.fetch."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, client, topics=None):
        self.calls.append((client, topics))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the environment and the global config."""
    for name in ("BROKERMETA_CONFIG", "BROKERMETA_BROKERS", "BROKERMETA_CLIENT_ID",
                 "BROKERMETA_REQUEST_TIMEOUT_MS", "BROKERMETA_METADATA_VERSION",
                 "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def patch_fetch(monkeypatch, recorder):
    def fetch(client, topics=None):
        return recorder(client, topics)

    monkeypatch.setattr(cli.MetadataClient, "fetch", fetch)
    return recorder


@pytest.fixture
def fetch(monkeypatch):
    """Patch the metadata request with a canned response."""
    return patch_fetch(monkeypatch, FetchRecorder(response=make_response()))


class TestParseArgs:
    """Test argument parsing."""

    def test_flags(self):
        """Test short section flags and topics."""
        args = cli.parse_args(["metadata", "-c", "-b", "-t", "-i", "-d", "a", "b"])

        assert args.print_cluster
        assert args.print_brokers
        assert args.print_topics
        assert args.print_internal_topics
        assert args.print_detailed_topics
        assert args.topics == ["a", "b"]

    @pytest.mark.parametrize("alias", ["status", "info"])
    def test_aliases(self, alias):
        """Test command aliases."""
        args = cli.parse_args([alias, "--print-brokers"])

        assert args.print_brokers
        assert args.topics == []

    def test_command_required(self):
        """Test a command must be given."""
        with pytest.raises(SystemExit):
            cli.parse_args([])


class TestMain:
    """Test main."""

    def test_full_report(self, fetch, capsys):
        """Test no flags prints every section, internal topics included."""
        cli.main(["metadata"])

        out = capsys.readouterr().out
        assert out.startswith("CLUSTER\n=======\ncluster-1\n\nBROKERS\n=======\n")
        assert "TOPICS\n======\n" in out
        assert "__consumer_offsets" in out
        assert fetch.calls[0][1] is None

    def test_brokers_only(self, fetch, capsys):
        """Test -b prints the roster only and requests no topics."""
        cli.main(["metadata", "-b"])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["ID", "HOST", "PORT", "RACK"]
        assert lines[1].split() == ["1", "broker-1", "9092", "rack-a"]
        assert lines[2].split() == ["2*", "broker-2", "9092"]
        assert fetch.calls[0][1] == []

    def test_detailed(self, fetch, capsys):
        """Test -d prints detail for non-internal topics only."""
        cli.main(["metadata", "-d"])

        out = capsys.readouterr().out
        assert out.startswith("topic1, 2 partitions, 3 replicas\n")
        assert "__consumer_offsets" not in out

    def test_explicit_topics(self, fetch, capsys):
        """Test topic arguments are requested and filter the output."""
        cli.main(["metadata", "foo"])

        assert capsys.readouterr().out == ""
        assert fetch.calls[0][1] == ["foo"]

    def test_brokers_flag_overrides_config(self, fetch):
        """Test --brokers reaches the client."""
        cli.main(["--brokers", "a:9092,b:9092", "metadata", "-c"])

        client = fetch.calls[0][0]
        assert client.bootstrap_servers == ["a:9092", "b:9092"]

    def test_request_failure(self, monkeypatch, capsys):
        """Test request failures exit with status 1."""
        patch_fetch(monkeypatch, FetchRecorder(error=MetadataRequestError("no broker available")))

        with pytest.raises(SystemExit) as excinfo:
            cli.main(["metadata"])

        assert excinfo.value.code == 1
        assert "unable to request metadata: no broker available" in capsys.readouterr().err

    def test_config_failure(self, tmp_path, capsys):
        """Test a missing config file exits with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--config", str(tmp_path / "missing.yaml"), "metadata"])

        assert excinfo.value.code == 1
        assert "unable to load config" in capsys.readouterr().err

    def test_bad_log_level(self, fetch, monkeypatch, capsys):
        """Test an unknown LOG_LEVEL exits with status 1 before any request."""
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with pytest.raises(SystemExit) as excinfo:
            cli.main(["metadata", "-b"])

        assert excinfo.value.code == 1
        assert "unable to load config: logging.level" in capsys.readouterr().err
        assert fetch.calls == []
