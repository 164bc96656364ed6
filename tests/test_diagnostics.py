import unittest
from unittest import mock

from polybind.diagnostics import Report, TooManyIssues
from polybind.errors import InvocationFailure, NoSuchMember

class ReportTests(unittest.TestCase):
	def setUp(self):
		self.report = Report(verbose=0, max_issues=3)
		self.report.complain_to_console = mock.Mock()

	def test_issues_accumulate(self):
		self.assertTrue(self.report.ok())
		self.report.import_found_nothing("nowhere.*")
		self.report.bad_argument("d:x", "not a decimal number")
		self.assertTrue(self.report.sick())
		self.assertEqual(2, len(self.report.issues))
		self.report.reset()
		self.assertTrue(self.report.ok())

	def test_too_many_issues(self):
		self.report.issue("one")
		self.report.issue("two")
		with self.assertRaises(TooManyIssues):
			self.report.issue("three")

	def test_binding_failure_mentions_the_cause(self):
		try:
			try: 1/0
			except ZeroDivisionError as ex:
				raise InvocationFailure("explode() blew up") from ex
		except InvocationFailure as ex:
			self.report.binding_failed(ex)
		self.report.binding_failed(NoSuchMember("Tester has no member called 'x'."))
		first, second = self.report.issues
		self.assertTrue(first.startswith("InvocationFailure: explode() blew up"))
		self.assertIn("caused by ZeroDivisionError", first)
		self.assertNotIn("caused by", second)

	def test_assert_no_issues(self):
		self.report.assert_no_issues("fine")
		self.report.issue("trouble")
		with self.assertRaises(AssertionError):
			self.report.assert_no_issues("not fine")
		self.report.complain_to_console.assert_called_once()

	def test_info_only_when_verbose(self):
		with mock.patch("builtins.print") as printer:
			self.report.info("quiet")
			Report(verbose=1).info("loud")
		self.assertEqual(1, printer.call_count)

if __name__ == '__main__':
	unittest.main()
