"""Tests for the one-time configuration gate."""

from __future__ import annotations

import logging
import threading

import pytest

import rackspace
from rackspace import PRODUCT_NAME, ProductInfo
from rackspace.infrastructure import http, serialization
from rackspace.sdk import SdkConfiguration
from rackspace.settings import RackspaceNet


class Recorder:
    """Callback stand-in that counts how often it ran."""

    def __init__(self, action=None) -> None:
        self.calls: list[object] = []
        self.action = action

    def __call__(self, target) -> None:
        self.calls.append(target)
        if self.action is not None:
            self.action(target)


def _callbacks() -> tuple[Recorder, Recorder, Recorder]:
    return Recorder(), Recorder(), Recorder()


class TestConfigure:
    def test_runs_all_callbacks_once(self, gate: RackspaceNet) -> None:
        on_http, on_json, on_options = _callbacks()

        gate.configure(on_http, on_json, on_options)

        assert gate.is_configured
        assert gate.sdk.is_configured
        assert on_options.calls == [gate.configuration]
        assert on_http.calls == [http.get_global_settings()]
        # once eagerly during configure
        assert len(on_json.calls) == 1

    def test_second_call_is_noop(self, gate: RackspaceNet) -> None:
        gate.configure(*_callbacks())
        on_http, on_json, on_options = _callbacks()

        gate.configure(on_http, on_json, on_options)

        assert on_http.calls == []
        assert on_json.calls == []
        assert on_options.calls == []

    def test_without_callbacks(self, gate: RackspaceNet) -> None:
        gate.configure()
        assert gate.is_configured
        assert gate.sdk.options.user_agents == gate.configuration.user_agents

    def test_options_callback_runs_before_propagation(self, gate: RackspaceNet) -> None:
        extra = ProductInfo("my-app", "2.1")

        gate.configure(configure=lambda options: options.user_agents.append(extra))

        assert gate.sdk.options.user_agents == [
            ProductInfo(PRODUCT_NAME, rackspace.__version__),
            extra,
        ]
        assert http.get_global_settings().user_agent == (
            f"{PRODUCT_NAME}/{rackspace.__version__} my-app/2.1"
        )

    def test_concurrent_callers_configure_once(self) -> None:
        sdk_configuration = SdkConfiguration()
        sdk_calls: list[object] = []
        original = sdk_configuration.configure

        def counting_configure(*args, **kwargs):
            sdk_calls.append(args)
            original(*args, **kwargs)

        sdk_configuration.configure = counting_configure  # type: ignore[method-assign]
        gate = RackspaceNet(sdk_configuration)
        on_options = Recorder()
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            gate.configure(configure=on_options)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(on_options.calls) == 1
        assert len(sdk_calls) == 1

    def test_failing_callback_leaves_gate_unconfigured(self, gate: RackspaceNet) -> None:
        def boom(options) -> None:
            raise RuntimeError("bad options")

        with pytest.raises(RuntimeError, match="bad options"):
            gate.configure(configure=boom)

        assert not gate.is_configured
        assert not gate.sdk.is_configured

        on_options = Recorder()
        gate.configure(configure=on_options)
        assert len(on_options.calls) == 1
        assert gate.is_configured

    def test_failing_json_callback_propagates(self, gate: RackspaceNet) -> None:
        def boom(settings) -> None:
            raise ValueError("bad json")

        with pytest.raises(ValueError, match="bad json"):
            gate.configure(
                configure_http=lambda settings: setattr(settings, "timeout", 1),
                configure_json=boom,
            )

        assert not gate.is_configured
        assert not serialization.has_default_settings()
        settings = http.get_global_settings()
        assert settings.timeout == http.DEFAULT_TIMEOUT_SECONDS
        assert settings.user_agent is None
        assert settings.trace_source is None

    def test_failing_http_callback_restores_http_defaults(self, gate: RackspaceNet) -> None:
        def boom(settings) -> None:
            settings.headers["X-Region"] = "DFW"
            raise RuntimeError("bad http")

        with pytest.raises(RuntimeError, match="bad http"):
            gate.configure(configure_http=boom)

        gate.reset_defaults()
        assert http.get_global_settings() == http.HttpClientSettings()

    def test_callback_reentering_reset_returns(self, gate: RackspaceNet) -> None:
        done = threading.Event()

        def worker() -> None:
            gate.configure(configure=lambda options: gate.reset_defaults())
            done.set()

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()

        assert done.wait(2), "configure() did not return"
        assert gate.is_configured

    def test_callback_reentering_configure_returns(self, gate: RackspaceNet) -> None:
        done = threading.Event()
        nested = Recorder()

        def worker() -> None:
            gate.sdk.configure(configure=lambda options: gate.sdk.configure(nested))
            done.set()

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()

        assert done.wait(2), "configure() did not return"
        assert gate.sdk.is_configured
        assert len(nested.calls) == 1


class TestResetDefaults:
    def test_noop_when_never_configured(self, gate: RackspaceNet) -> None:
        custom = [ProductInfo("a", "1"), ProductInfo("b", "2")]
        gate.configuration.user_agents[:] = custom

        gate.reset_defaults()

        assert gate.configuration.user_agents == custom
        assert not gate.is_configured

    def test_restores_single_default_user_agent(self, gate: RackspaceNet) -> None:
        gate.configure(
            configure=lambda options: options.user_agents.extend(
                [ProductInfo("a", "1"), ProductInfo("b", "2")]
            )
        )

        gate.reset_defaults()

        assert gate.configuration.user_agents == [
            ProductInfo(PRODUCT_NAME, rackspace.__version__)
        ]
        assert not gate.is_configured

    def test_resets_base_sdk_and_collaborators(self, gate: RackspaceNet) -> None:
        gate.configure(
            configure_http=lambda settings: setattr(settings, "timeout", 5),
            configure_json=lambda settings: setattr(settings, "indent", 2),
        )
        assert http.get_global_settings().timeout == 5
        assert serialization.has_default_settings()

        gate.reset_defaults()

        assert not gate.sdk.is_configured
        assert gate.sdk.options.user_agents == []
        assert http.get_global_settings().timeout == http.DEFAULT_TIMEOUT_SECONDS
        assert http.get_global_settings().user_agent is None
        assert not serialization.has_default_settings()

    def test_configure_runs_again_after_reset(self, gate: RackspaceNet) -> None:
        first = _callbacks()
        gate.configure(*first)
        gate.reset_defaults()
        second = _callbacks()

        gate.configure(*second)

        for recorder in (*first, *second):
            assert len(recorder.calls) == 1
        assert gate.is_configured

    def test_configure_and_reset_log_at_debug(self, gate: RackspaceNet, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="rackspace.settings"):
            gate.configure()
            gate.reset_defaults()
        assert [r for r in caplog.records if r.name == "rackspace.settings"] == []

        caplog.clear()
        with caplog.at_level(logging.DEBUG, logger="rackspace.settings"):
            gate.configure()
            gate.reset_defaults()
        messages = [r.getMessage() for r in caplog.records if r.name == "rackspace.settings"]
        assert messages[0].startswith("Rackspace SDK configured")
        assert messages[1] == "Rackspace SDK configuration reset to defaults"


class TestModuleLevelFacade:
    def test_singleton_starts_with_default_user_agent(self) -> None:
        assert rackspace.configuration.user_agents == [
            ProductInfo(PRODUCT_NAME, rackspace.__version__)
        ]

    def test_configure_and_reset(self) -> None:
        on_options = Recorder()

        rackspace.configure(configure=on_options)
        rackspace.configure(configure=on_options)

        assert on_options.calls == [rackspace.configuration]
        assert rackspace.sdk.configuration.user_agents == rackspace.configuration.user_agents

        rackspace.reset_defaults()
        assert not rackspace.settings.get_default().is_configured

    def test_tracing_handle_is_shared_with_base_sdk(self) -> None:
        assert rackspace.Tracing.http is rackspace.sdk.Tracing.http
        assert http.get_global_settings().trace_source is None

        rackspace.configure()

        assert http.get_global_settings().trace_source is rackspace.Tracing.http
