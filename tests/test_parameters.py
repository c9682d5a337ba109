import pytest

from conftest import run
from x32_portnamer.errors import QueryTimeout
from x32_portnamer.parameters import Parameter, ParameterDispatcher, int_param, str_param

RATE = int_param("/-prefs/clockrate")
SOURCE = int_param("/-prefs/clocksource")
NAME = str_param("/ch/01/config/name")


class RecordingConnection:
    """Answers request() from a dict of address -> reply arguments"""

    def __init__(self, replies):
        self.replies = replies
        self.requests = []
        self.sent = []
        self.values = {}
        self.watched = set()
        self.keepalive = False

    async def request(self, address, timeout):
        self.requests.append(address)
        if address not in self.replies:
            raise QueryTimeout(address, timeout)
        if address in self.watched:
            self.values[address] = self.replies[address]
        return self.replies[address]

    def send_message(self, address, value=None):
        self.sent.append((address, value))

    def cached(self, address):
        return self.values.get(address)

    def watch(self, address):
        self.watched.add(address)
        self.values.pop(address, None)

    def forget(self, address):
        self.watched.discard(address)
        self.values.pop(address, None)

    def start_keepalive(self):
        self.keepalive = True

    def stop_keepalive(self):
        self.keepalive = False


@pytest.mark.parametrize("node, args, value", [
    (RATE, (1,), 1),
    (RATE, (1.0,), 1),
    (RATE, (), None),
    (RATE, ("x",), None),
    (RATE, (True,), None),
    (NAME, ("Kick",), "Kick"),
    (NAME, ("",), ""),
    (NAME, (3,), None),
    (Parameter("/xinfo", "any"), ("1.2.3.4", "X32"), "1.2.3.4"),
])
def test_decode(node, args, value):
    assert node.decode(args) == value


def test_query_keeps_order():
    connection = RecordingConnection({RATE.address: (1,), NAME.address: ("Kick",), SOURCE.address: ()})
    dispatcher = ParameterDispatcher(connection)
    assert run(dispatcher.query(NAME, RATE, SOURCE)) == ["Kick", 1, None]


def test_query_errors_propagate():
    dispatcher = ParameterDispatcher(RecordingConnection({}), timeout=0.5)
    with pytest.raises(QueryTimeout) as exc:
        run(dispatcher.query(RATE))
    assert exc.value.timeout == 0.5


def test_subscribed_nodes_answer_from_cache():
    connection = RecordingConnection({RATE.address: (0,)})
    dispatcher = ParameterDispatcher(connection)
    token = dispatcher.subscription()

    assert run(dispatcher.add_and_query(token, RATE)) == [0]
    assert connection.keepalive
    connection.values[RATE.address] = (1,)  # pushed update from the console
    assert run(dispatcher.query(RATE)) == [1]
    assert connection.requests == [RATE.address]


def test_remove_releases_subscription():
    connection = RecordingConnection({RATE.address: (0,), SOURCE.address: (0,)})
    dispatcher = ParameterDispatcher(connection)
    first, second = dispatcher.subscription("a"), dispatcher.subscription("b")
    assert first is not second

    run(dispatcher.add_and_query(first, RATE, SOURCE))
    run(dispatcher.add_and_query(second, RATE))

    dispatcher.remove(first, RATE, SOURCE)
    assert connection.keepalive
    assert RATE.address in connection.values  # still held by the second token
    assert SOURCE.address not in connection.values

    dispatcher.remove(second, RATE)
    dispatcher.remove(second, RATE)
    assert not connection.keepalive
    assert connection.values == {}

    run(dispatcher.query(RATE))
    assert connection.requests.count(RATE.address) == 2


def test_unsubscribed_queries_go_to_console():
    connection = RecordingConnection({RATE.address: (0,)})
    dispatcher = ParameterDispatcher(connection)
    run(dispatcher.query(RATE))
    run(dispatcher.query(RATE))
    assert connection.requests == [RATE.address, RATE.address]


def test_set_sends_value():
    connection = RecordingConnection({})
    ParameterDispatcher(connection).set(RATE, 1)
    assert connection.sent == [("/-prefs/clockrate", 1)]


def test_subscribing_does_not_reuse_earlier_replies():
    connection = RecordingConnection({RATE.address: (0,)})
    dispatcher = ParameterDispatcher(connection)
    run(dispatcher.query(RATE))
    assert connection.values == {}

    connection.replies[RATE.address] = (1,)
    assert run(dispatcher.add_and_query(dispatcher.subscription(), RATE)) == [1]
    assert connection.requests == [RATE.address, RATE.address]
    assert connection.watched == {RATE.address}
