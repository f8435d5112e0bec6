import unittest
from unittest import mock

import requests

from resultmanager.core.entities import Result, Student
from resultmanager.services.resource_client import RequestFailure, ResourceClient


def _response(status_code=200, body=None, json_error=False):
    res = mock.Mock(spec=requests.Response)
    res.status_code = status_code
    if json_error:
        res.json.side_effect = ValueError("No JSON")
    else:
        res.json.return_value = body
    return res


@mock.patch("resultmanager.services.resource_client.requests.request")
class ResourceClientTests(unittest.TestCase):
    def setUp(self):
        self.client = ResourceClient("http://localhost:3001/", "students", Student, "student", timeout=5)

    def test_list_returns_server_order(self, request):
        request.return_value = _response(
            body=[
                {"id": 2, "name": "Ravi", "email": "r@s.edu"},
                {"id": 1, "name": "Asha", "email": "a@s.edu", "section": "10-A"},
            ]
        )

        students = self.client.list()

        request.assert_called_once_with("GET", "http://localhost:3001/students", json=None, timeout=5)
        self.assertEqual([s.id for s in students], [2, 1])
        self.assertEqual(students[1].section, "10-A")

    def test_create_posts_without_id(self, request):
        request.return_value = _response(status_code=201, body={"id": 9, "name": "Asha", "email": "a@s.edu"})

        created = self.client.create(Student(name="Asha", email="a@s.edu", enrollmentDate="2024-06-01"))

        method, url = request.call_args.args
        body = request.call_args.kwargs["json"]
        self.assertEqual((method, url), ("POST", "http://localhost:3001/students"))
        self.assertNotIn("id", body)
        self.assertEqual(body["enrollmentDate"], "2024-06-01")
        self.assertEqual(created.id, 9)

    def test_update_puts_full_entity(self, request):
        request.return_value = _response(body={"id": 4, "name": "Ravi K", "email": "r@s.edu"})

        updated = self.client.update(4, Student(id=4, name="Ravi K", email="r@s.edu"))

        method, url = request.call_args.args
        self.assertEqual((method, url), ("PUT", "http://localhost:3001/students/4"))
        self.assertEqual(request.call_args.kwargs["json"]["id"], 4)
        self.assertEqual(updated.name, "Ravi K")

    def test_delete_ignores_body(self, request):
        request.return_value = _response(json_error=True)

        self.assertTrue(self.client.delete("abc"))
        request.assert_called_once_with("DELETE", "http://localhost:3001/students/abc", json=None, timeout=5)

    def test_non_2xx_is_request_failure(self, request):
        request.return_value = _response(status_code=404, body={"error": "not found"})

        with self.assertRaises(RequestFailure) as ctx:
            self.client.delete(1)
        self.assertEqual(str(ctx.exception), "Failed to delete student (HTTP 404)")

        request.return_value = _response(status_code=500)
        with self.assertRaisesRegex(RequestFailure, "Failed to load students"):
            self.client.list()

    def test_transport_error_keeps_message(self, request):
        request.side_effect = requests.ConnectionError("Connection refused")

        with self.assertRaises(RequestFailure) as ctx:
            self.client.list()
        self.assertIn("Connection refused", str(ctx.exception))
        self.assertEqual(request.call_count, 1)

    def test_bad_bodies_are_request_failures(self, request):
        request.return_value = _response(json_error=True)
        with self.assertRaises(RequestFailure):
            self.client.create(Student(name="A", email="a@s.edu"))

        request.return_value = _response(body={"students": []})
        with self.assertRaises(RequestFailure):
            self.client.list()

    def test_one_odd_record_does_not_fail_the_load(self, request):
        request.return_value = _response(
            body=[
                {"id": 1, "studentId": 3, "subject": "Math", "marks": 85, "grade": "A"},
                {"id": 2, "studentId": 3, "subject": "Science", "marks": 85.5, "grade": "A"},
                {"id": 3, "studentId": [3], "subject": "Art", "marks": 40},
            ]
        )
        client = ResourceClient("http://localhost:3001", "results", Result, "result")

        with self.assertLogs("resultmanager.services.resource_client", level="WARNING"):
            results = client.list()

        self.assertEqual([r.id for r in results], [1, 2])
        self.assertEqual(results[1].marks, 85.5)

    def test_null_text_fields_are_read_as_blank(self, request):
        request.return_value = _response(body=[{"id": 1, "name": None, "email": None}, {"id": 2, "name": "Ravi", "email": "r@s.edu"}])

        students = self.client.list()

        self.assertEqual([s.id for s in students], [1, 2])
        self.assertEqual(students[0].name, "")

    def test_result_model_reads_camel_case(self, request):
        request.return_value = _response(
            body=[{"id": "r1", "studentId": 3, "subject": "Math", "marks": 85, "grade": "A", "examDate": "2025-03-01"}]
        )
        client = ResourceClient("http://localhost:3001", "results", Result, "result")

        result = client.list()[0]

        self.assertEqual(result.student_id, 3)
        self.assertEqual(result.exam_date, "2025-03-01")


class ResourceClientSettingsTests(unittest.TestCase):
    def test_from_settings(self):
        client = ResourceClient.from_settings("results")
        self.assertTrue(client.url.endswith("/results"))
        self.assertIs(client.model, Result)

    def test_unknown_resource(self):
        with self.assertRaises(ValueError):
            ResourceClient.from_settings("teachers")


if __name__ == "__main__":
    unittest.main()
