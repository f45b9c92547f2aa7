"""
Unit Tests for the Artifact Publisher
"""

import json
import os
import pytest
from unittest.mock import Mock, patch

from blockchain.errors import ArtifactNotFoundError, DeploymentNotConfirmedError, PublishError
from blockchain.artifacts import ArtifactRegistry
from blockchain.contract_factory import DeployedContract
from deployment.publisher import ArtifactPublisher

from conftest import DEPLOYED_ADDRESS, VOTING_ARTIFACT


def make_deployed(address=DEPLOYED_ADDRESS, name='Voting'):
    deployed = Mock()
    deployed.name = name
    deployed.artifact_name = name
    deployed.address = address
    return deployed


@pytest.fixture
def publisher(contracts_dir, artifact_registry):
    return ArtifactPublisher(str(contracts_dir), artifact_registry)


class TestPublish:
    """Test frontend file output"""

    def test_creates_missing_directory(self, publisher, contracts_dir):
        assert not contracts_dir.exists()

        publisher.publish(make_deployed())

        assert contracts_dir.is_dir()

    def test_existing_directory_is_reused(self, publisher, contracts_dir):
        publisher.publish(make_deployed())
        publisher.publish(make_deployed('0x000000000000000000000000000000000000dEaD'))

        with open(contracts_dir / 'contract-address.json') as f:
            assert json.load(f) == {"Voting": '0x000000000000000000000000000000000000dEaD'}

    def test_address_file_format(self, publisher, contracts_dir):
        publisher.publish(make_deployed())

        content = (contracts_dir / 'contract-address.json').read_text()
        assert content == '{\n  "Voting": "%s"\n}' % DEPLOYED_ADDRESS

    def test_artifact_written_verbatim(self, publisher, contracts_dir):
        publisher.publish(make_deployed())

        content = (contracts_dir / 'Voting.json').read_text()
        assert json.loads(content) == VOTING_ARTIFACT
        assert content == json.dumps(VOTING_ARTIFACT, indent=2)

    def test_overwrites_previous_outputs(self, publisher, contracts_dir):
        contracts_dir.mkdir(parents=True)
        (contracts_dir / 'Voting.json').write_text('stale')
        (contracts_dir / 'contract-address.json').write_text('stale')

        publisher.publish(make_deployed())

        assert json.loads((contracts_dir / 'Voting.json').read_text()) == VOTING_ARTIFACT
        assert json.loads((contracts_dir / 'contract-address.json').read_text()) == {
            "Voting": DEPLOYED_ADDRESS
        }

    def test_no_temp_files_left(self, publisher, contracts_dir):
        publisher.publish(make_deployed())

        assert sorted(os.listdir(contracts_dir)) == ['Voting.json', 'contract-address.json']


class TestPublishFailures:
    """A failed publish records nothing"""

    def test_directory_blocked_by_file(self, publisher, contracts_dir):
        contracts_dir.parent.mkdir(parents=True)
        contracts_dir.write_text('not a directory')

        with pytest.raises(PublishError) as exc_info:
            publisher.publish(make_deployed())

        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.address == DEPLOYED_ADDRESS

    def test_staging_failure_keeps_old_address(self, publisher, contracts_dir):
        contracts_dir.mkdir(parents=True)
        (contracts_dir / 'contract-address.json').write_text('{"Voting": "0xold"}')

        real_dump = json.dump
        calls = []

        def failing_dump(obj, fp, **kwargs):
            calls.append(obj)
            if len(calls) == 2:
                raise OSError(28, "No space left on device")
            return real_dump(obj, fp, **kwargs)

        with patch('deployment.publisher.json.dump', side_effect=failing_dump):
            with pytest.raises(PublishError):
                publisher.publish(make_deployed())

        assert (contracts_dir / 'contract-address.json').read_text() == '{"Voting": "0xold"}'
        assert sorted(os.listdir(contracts_dir)) == ['contract-address.json']

    def test_rename_failure_leaves_address_unrecorded(self, publisher, contracts_dir):
        real_replace = os.replace
        calls = []

        def failing_replace(src, dst):
            calls.append(dst)
            if len(calls) == 2:
                raise PermissionError(13, "Permission denied", dst)
            return real_replace(src, dst)

        with patch('deployment.publisher.os.replace', side_effect=failing_replace):
            with pytest.raises(PublishError):
                publisher.publish(make_deployed())

        assert calls[-1].endswith('contract-address.json')
        assert sorted(os.listdir(contracts_dir)) == ['Voting.json']

    def test_missing_artifact_is_publish_error(self, contracts_dir, tmp_path):
        publisher = ArtifactPublisher(
            str(contracts_dir), ArtifactRegistry(str(tmp_path / 'empty'))
        )

        with pytest.raises(PublishError) as exc_info:
            publisher.publish(make_deployed())

        assert isinstance(exc_info.value.__cause__, ArtifactNotFoundError)
        assert not (contracts_dir / 'contract-address.json').exists()

    def test_corrupt_artifact_is_publish_error(self, artifacts_dir, contracts_dir):
        (artifacts_dir / 'contracts' / 'Voting.sol' / 'Voting.json').write_text('{"abi": [')
        publisher = ArtifactPublisher(str(contracts_dir), ArtifactRegistry(str(artifacts_dir)))

        with pytest.raises(PublishError) as exc_info:
            publisher.publish(make_deployed())

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.address == DEPLOYED_ADDRESS
        assert not (contracts_dir / 'contract-address.json').exists()

    def test_unconfirmed_handle_rejected(self, publisher, contracts_dir):
        deployed = DeployedContract(Mock(), 'Voting', b'\x01' * 32, 1)

        with pytest.raises(DeploymentNotConfirmedError):
            publisher.publish(deployed)

        assert not contracts_dir.exists()
