import asyncio
import json
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError, EndpointConnectionError

from put_metrics.core.exceptions import AppErrorCode
from put_metrics.domains.metric import Dimension, MetricDatum
from put_metrics.services.publish import describe_metric, put_metrics


def _access_denied() -> ClientError:
    return ClientError(
        {
            "Error": {
                "Code": "AccessDenied",
                "Message": "User is not authorized to perform: cloudwatch:PutMetricData",
            }
        },
        "PutMetricData",
    )


class TestPutMetrics(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock()

    def _run(self, namespace: str, metric_data: str):
        return asyncio.run(put_metrics(self.client, namespace, metric_data))

    @patch("put_metrics.services.publish.logger")
    def test_single_metric(self, mock_logger):
        result = self._run("Test", '[{"MetricName":"X","Value":1}]')

        self.assertTrue(result.success)
        self.assertEqual(result.metrics_count, 1)
        self.client.put_metric_data.assert_called_once_with(
            Namespace="Test", MetricData=[{"MetricName": "X", "Value": 1.0}]
        )

    @patch("put_metrics.services.publish.logger")
    def test_full_batch_sent_in_one_request(self, mock_logger):
        data = [
            {
                "MetricName": "Latency",
                "Value": 12.5,
                "Unit": "Milliseconds",
                "Timestamp": "2025-01-01T12:00:00Z",
                "Dimensions": [{"Name": "Service", "Value": "api"}],
            },
            {
                "MetricName": "Payload",
                "StatisticValues": {"SampleCount": 4, "Sum": 100, "Minimum": 5, "Maximum": 50},
            },
        ] + [{"MetricName": f"metric_{i}", "Value": i} for i in range(998)]

        result = self._run("My/App_1.0", json.dumps(data))

        self.assertTrue(result.success)
        self.assertEqual(result.metrics_count, 1000)
        self.client.put_metric_data.assert_called_once()
        kwargs = self.client.put_metric_data.call_args.kwargs
        self.assertEqual(kwargs["Namespace"], "My/App_1.0")
        self.assertEqual(len(kwargs["MetricData"]), 1000)
        self.assertEqual(
            kwargs["MetricData"][0],
            {
                "MetricName": "Latency",
                "Value": 12.5,
                "Unit": "Milliseconds",
                "Timestamp": datetime(2025, 1, 1, 12, tzinfo=timezone.utc),
                "Dimensions": [{"Name": "Service", "Value": "api"}],
            },
        )

    @patch("put_metrics.services.publish.logger")
    def test_logs_each_published_metric(self, mock_logger):
        data = [
            {
                "MetricName": "Latency",
                "Value": 12.5,
                "Unit": "Milliseconds",
                "Dimensions": [
                    {"Name": "Service", "Value": "api"},
                    {"Name": "Stage", "Value": "prod"},
                ],
            },
            {"MetricName": "Requests", "Values": [1, 2]},
        ]

        self._run("Test", json.dumps(data))

        logged = [call.args[0] for call in mock_logger.info.call_args_list]
        self.assertIn("  - Latency [Service=api, Stage=prod]: 12.5 Milliseconds", logged)
        self.assertIn("  - Requests: statistic-set", logged)
        self.assertIn('Publishing 2 metric(s) to namespace "Test"', logged)

    @patch("put_metrics.services.publish.logger")
    def test_empty_array_fails_before_network_call(self, mock_logger):
        result = self._run("Test", "[]")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "metric-data array cannot be empty")
        self.assertEqual(result.error_code, AppErrorCode.METRIC_DATA_VALIDATION_ERROR)
        self.client.put_metric_data.assert_not_called()
        mock_logger.error.assert_called_once_with(
            "Failed to put metrics: metric-data array cannot be empty"
        )

    @patch("put_metrics.services.publish.logger")
    def test_malformed_json_fails_before_network_call(self, mock_logger):
        result = self._run("Test", "{not valid")

        self.assertFalse(result.success)
        self.assertIn("Failed to parse metric-data JSON", result.error)
        self.assertEqual(result.error_code, AppErrorCode.METRIC_DATA_PARSE_ERROR)
        self.client.put_metric_data.assert_not_called()

    @patch("put_metrics.services.publish.logger")
    def test_deeply_nested_json_is_a_parse_failure(self, mock_logger):
        result = self._run("Test", "[" * 100000)

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, AppErrorCode.METRIC_DATA_PARSE_ERROR)
        self.client.put_metric_data.assert_not_called()

    @patch("put_metrics.services.publish.logger")
    def test_boolean_value_rejected_before_network_call(self, mock_logger):
        result = self._run("Test", '[{"MetricName":"X","Value":true}]')

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, AppErrorCode.METRIC_DATA_VALIDATION_ERROR)
        self.client.put_metric_data.assert_not_called()

    @patch("put_metrics.services.publish.logger")
    def test_invalid_namespace_fails_before_parsing(self, mock_logger):
        result = self._run("My App", "{not valid")

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, AppErrorCode.INVALID_NAMESPACE)
        self.client.put_metric_data.assert_not_called()

    @patch("put_metrics.services.publish.logger")
    def test_backend_authorization_error(self, mock_logger):
        self.client.put_metric_data.side_effect = _access_denied()

        result = self._run("Test", '[{"MetricName":"X","Value":1}]')

        self.assertFalse(result.success)
        self.assertIsNone(result.metrics_count)
        self.assertEqual(result.error_code, AppErrorCode.CLOUDWATCH_ERROR)
        self.assertIn(
            "User is not authorized to perform: cloudwatch:PutMetricData", result.error
        )
        self.assertTrue(result.error.startswith("CloudWatch PutMetricData failed: "))
        self.client.put_metric_data.assert_called_once()

    @patch("put_metrics.services.publish.logger")
    def test_backend_connection_error(self, mock_logger):
        self.client.put_metric_data.side_effect = EndpointConnectionError(
            endpoint_url="https://monitoring.eu-west-1.amazonaws.com/"
        )

        result = self._run("Test", '[{"MetricName":"X","Value":1}]')

        self.assertFalse(result.success)
        self.assertIn("monitoring.eu-west-1.amazonaws.com", result.error)
        self.client.put_metric_data.assert_called_once()

    @patch("put_metrics.services.publish.describe_metric")
    @patch("put_metrics.services.publish.logger")
    def test_log_failure_does_not_change_result(self, mock_logger, mock_describe):
        mock_describe.side_effect = RuntimeError("log sink unavailable")

        result = self._run("Test", '[{"MetricName":"X","Value":1}]')

        self.assertTrue(result.success)
        self.assertEqual(result.metrics_count, 1)
        mock_logger.warning.assert_called_once()


class TestDescribeMetric(unittest.TestCase):
    def test_value_with_unit(self):
        metric = MetricDatum(metric_name="Errors", value=3, unit="Count")

        self.assertEqual(describe_metric(metric), "  - Errors: 3 Count")

    def test_fractional_value(self):
        metric = MetricDatum(metric_name="Load", value=0.25, unit="Percent")

        self.assertEqual(describe_metric(metric), "  - Load: 0.25 Percent")

    def test_statistic_set_with_dimensions(self):
        metric = MetricDatum(
            metric_name="Latency",
            values=[1, 2],
            dimensions=[Dimension(name="Host", value="a")],
        )

        self.assertEqual(describe_metric(metric), "  - Latency [Host=a]: statistic-set")


if __name__ == "__main__":
    unittest.main()
