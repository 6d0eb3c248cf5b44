import io
import json
import logging
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

import select_relay
from relay_select.catalog import RetrievalError
from relay_select.config import EXIT_NO_RESULT, EXIT_OK, EXIT_RETRIEVAL_FAILED
from relay_select.models import CandidateServer, LatencyMeasurement

FAST = CandidateServer(hostname="ch-zrh-001-wireguard", country_code="ch", active=True,
                       ipv4_addr_in="10.0.0.1")
SLOW = CandidateServer(hostname="ch-zrh-002-wireguard", country_code="ch", active=True,
                       ipv4_addr_in="10.0.0.2")


def run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = select_relay.main(argv)
    return code, out.getvalue(), err.getvalue()


@patch("select_relay.configure_logging")
@patch("select_relay.fetch_servers", return_value=[FAST, SLOW])
class MainTests(unittest.TestCase):
    @patch("select_relay.select_best", return_value=LatencyMeasurement(FAST, 4.2))
    def test_plain_output_strips_suffix(self, mock_best, mock_fetch, _mock_logging):
        code, out, _ = run(["-c", "ch", "--diskless"])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.strip(), "ch-zrh-001")
        mock_fetch.assert_called_once_with("wireguard")
        mock_best.assert_called_once_with([FAST, SLOW], "ch", True)

    @patch("select_relay.select_best", return_value=LatencyMeasurement(FAST, 4.2))
    def test_json_output_is_server_record(self, _mock_best, _mock_fetch, _mock_logging):
        code, out, _ = run(["-o", "json"])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(json.loads(out)["hostname"], "ch-zrh-001-wireguard")

    @patch("select_relay.select_top_n",
           return_value=[LatencyMeasurement(FAST, 4.2), LatencyMeasurement(SLOW, 9.0)])
    def test_top_n_json_output(self, mock_top, _mock_fetch, _mock_logging):
        code, out, _ = run(["-n", "5", "-o", "json", "-t", "openvpn"])
        self.assertEqual(code, EXIT_OK)
        data = json.loads(out)
        self.assertEqual([d["hostname"] for d in data], ["ch-zrh-001-wireguard", "ch-zrh-002-wireguard"])
        self.assertEqual(data[1]["rtt_ms"], 9.0)
        mock_top.assert_called_once_with([FAST, SLOW], None, False, 5)

    @patch("select_relay.select_top_n",
           return_value=[LatencyMeasurement(FAST, 4.2), LatencyMeasurement(SLOW, 9.0)])
    def test_top_n_plain_output(self, _mock_top, _mock_fetch, _mock_logging):
        code, out, _ = run(["-n", "2"])
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(out.split(), ["ch-zrh-001", "ch-zrh-002"])

    @patch("select_relay.select_best", return_value=None)
    def test_no_result_is_reported(self, _mock_best, _mock_fetch, _mock_logging):
        code, out, err = run([])
        self.assertEqual(code, EXIT_NO_RESULT)
        self.assertEqual(out, "")
        self.assertIn("No eligible server", err)

    def test_retrieval_failure_is_fatal(self, mock_fetch, _mock_logging):
        mock_fetch.side_effect = RetrievalError("unreachable")
        code, out, _ = run([])
        self.assertEqual(code, EXIT_RETRIEVAL_FAILED)
        self.assertEqual(out, "")

    def test_count_must_be_positive(self, _mock_fetch, _mock_logging):
        with self.assertRaises(SystemExit):
            run(["-n", "0"])


@patch("select_relay.logging.basicConfig")
class ConfigureLoggingTests(unittest.TestCase):
    def level_for(self, argv, mock_config):
        args = select_relay.build_parser().parse_args(argv)
        select_relay.configure_logging(args.verbose, args.quiet)
        return mock_config.call_args.kwargs["level"]

    def test_verbosity_flags_map_to_levels(self, mock_config):
        self.assertEqual(self.level_for([], mock_config), logging.WARNING)
        self.assertEqual(self.level_for(["-v"], mock_config), logging.INFO)
        self.assertEqual(self.level_for(["-vv"], mock_config), logging.DEBUG)
        self.assertEqual(self.level_for(["-q"], mock_config), logging.ERROR)

    def test_logs_go_to_stderr(self, mock_config):
        select_relay.configure_logging()
        self.assertIs(mock_config.call_args.kwargs["stream"], sys.stderr)


if __name__ == "__main__":
    unittest.main()
