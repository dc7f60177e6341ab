from fcache.hooks import Hooks


def test_defaults_are_empty():
    hooks = Hooks()
    assert [hooks.on_set, hooks.on_get, hooks.on_execute, hooks.on_done, hooks.log_error] == [
        None
    ] * 5


def test_run_passes_argument():
    seen = []
    hooks = Hooks()
    hooks.run(seen.append, 42)
    assert seen == [42]


def test_run_with_no_hook_logs_nothing():
    logged = []
    hooks = Hooks(log_error=logged.append)
    hooks.run(None, 1)
    assert logged == []


def test_raising_hook_is_logged():
    logged = []
    failure = RuntimeError("hook failed")

    def hook(arg):
        raise failure

    hooks = Hooks(log_error=logged.append)
    hooks.run(hook, "x")
    assert logged == [failure]


def test_raising_hook_without_logger_is_swallowed():
    calls = []

    def hook(arg):
        calls.append(arg)
        raise ValueError("nope")

    result = Hooks().run(hook, 7)
    assert result is None
    assert calls == [7]


def test_failing_logger_is_swallowed():
    attempts = []

    def bad_logger(err):
        attempts.append(err)
        raise RuntimeError("logger broke")

    def hook(arg):
        raise KeyError(arg)

    hooks = Hooks(log_error=bad_logger)
    result = hooks.run(hook, "k")
    assert result is None
    assert len(attempts) == 1
    assert isinstance(attempts[0], KeyError)
    assert attempts[0].args == ("k",)


def test_log_forwards_error():
    logged = []
    err = ValueError("direct")
    Hooks(log_error=logged.append).log(err)
    assert logged == [err]


def test_successful_hook_does_not_log():
    logged = []
    hooks = Hooks(log_error=logged.append)
    hooks.run(lambda arg: "ignored", 3)
    assert logged == []