import json
import threading
import unittest

from weatherapp.dispatcher import ResultDispatcher
from weatherapp.errors import DecodeFailure
from weatherapp.executors import InlineCallbackContext, QueueCallbackContext


def _payload():
    return json.dumps({
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "main": {"temp": 21.0, "humidity": 40},
        "dt": 1704110400,
        "name": "Berlin",
    })


class RecordingPresenter:
    def __init__(self):
        self.data = []
        self.errors = 0

    def on_data(self, model):
        self.data.append(model)

    def on_error(self):
        self.errors += 1


class TestDecode(unittest.TestCase):
    def test_decodes_valid_document(self):
        model = ResultDispatcher.decode(_payload())
        self.assertEqual(model.name, "Berlin")
        self.assertEqual(model.main.temp, 21.0)

    def test_empty_and_blank_payloads_fail(self):
        for raw in (None, "", "   \n"):
            with self.assertRaises(DecodeFailure):
                ResultDispatcher.decode(raw)

    def test_json_null_fails(self):
        with self.assertRaises(DecodeFailure):
            ResultDispatcher.decode("null")

    def test_garbage_fails(self):
        with self.assertRaises(DecodeFailure):
            ResultDispatcher.decode("<html>502 Bad Gateway</html>")

    def test_try_decode_returns_model(self):
        dispatcher = ResultDispatcher(InlineCallbackContext())
        model = dispatcher.try_decode(_payload())
        self.assertEqual(model.name, "Berlin")

    def test_try_decode_logs_and_returns_none(self):
        dispatcher = ResultDispatcher(InlineCallbackContext())
        with self.assertLogs("weatherapp.dispatcher", level="WARNING") as logs:
            self.assertIsNone(dispatcher.try_decode("{not json", source="network"))
        self.assertIn("Discarding network weather payload", logs.output[0])


class TestDispatch(unittest.TestCase):
    def test_decode_and_dispatch_success(self):
        presenter = RecordingPresenter()
        dispatcher = ResultDispatcher(InlineCallbackContext())
        self.assertTrue(dispatcher.decode_and_dispatch(_payload(), presenter))
        self.assertEqual(len(presenter.data), 1)
        self.assertEqual(presenter.errors, 0)

    def test_decode_and_dispatch_failure_reports_error(self):
        presenter = RecordingPresenter()
        dispatcher = ResultDispatcher(InlineCallbackContext())
        with self.assertLogs("weatherapp.dispatcher", level="WARNING"):
            self.assertFalse(dispatcher.decode_and_dispatch("{}", presenter))
        self.assertEqual(presenter.data, [])
        self.assertEqual(presenter.errors, 1)

    def test_callbacks_go_through_the_context(self):
        context = QueueCallbackContext()
        presenter = RecordingPresenter()
        dispatcher = ResultDispatcher(context)

        worker = threading.Thread(target=lambda: dispatcher.decode_and_dispatch(_payload(), presenter))
        worker.start()
        worker.join(timeout=5)
        dispatcher.dispatch_error(presenter)

        self.assertEqual(presenter.data, [])
        self.assertEqual(presenter.errors, 0)
        self.assertEqual(context.run_pending(), 2)
        self.assertEqual(len(presenter.data), 1)
        self.assertEqual(presenter.errors, 1)


if __name__ == "__main__":
    unittest.main()
