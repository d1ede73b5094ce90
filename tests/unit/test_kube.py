"""Tests for Kubernetes client bootstrap."""

from unittest.mock import patch

import pytest
from kubernetes.config.config_exception import ConfigException

from cert_sync import ConfigError
from utils import kube


@pytest.mark.unit
class TestLoadKubeConfig:
    """Tests for load_kube_config."""

    def test_uses_kubeconfig_when_present(self, tmp_path):
        kubeconfig = tmp_path / "config"
        kubeconfig.write_text("apiVersion: v1\n")

        with patch.object(kube.config, "load_kube_config") as load, \
                patch.object(kube.config, "load_incluster_config") as incluster:
            assert kube.load_kube_config(str(kubeconfig)) == "kubeconfig"

        load.assert_called_once_with(config_file=str(kubeconfig))
        incluster.assert_not_called()

    def test_falls_back_to_incluster(self, tmp_path):
        with patch.object(kube.config, "load_kube_config") as load, \
                patch.object(kube.config, "load_incluster_config") as incluster:
            assert kube.load_kube_config(str(tmp_path / "missing")) == "incluster"

        load.assert_not_called()
        incluster.assert_called_once()

    def test_broken_kubeconfig_falls_back(self, tmp_path):
        kubeconfig = tmp_path / "config"
        kubeconfig.write_text("garbage")

        with patch.object(kube.config, "load_kube_config", side_effect=ConfigException("bad")), \
                patch.object(kube.config, "load_incluster_config") as incluster:
            assert kube.load_kube_config(str(kubeconfig)) == "incluster"

        incluster.assert_called_once()

    def test_no_config_at_all(self, tmp_path):
        with patch.object(kube.config, "load_incluster_config",
                          side_effect=ConfigException("Service host/port is not set.")):
            with pytest.raises(ConfigError, match="Kubernetes configuration"):
                kube.load_kube_config(str(tmp_path / "missing"))

    def test_default_path_from_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert kube.default_kubeconfig_path() == str(tmp_path / ".kube" / "config")
