import unittest

from coursewatch.const import CORRUPTION_MARKER
from coursewatch.parser import (
    check_response,
    is_login_success,
    get_login_token,
    get_std_name,
    get_seat_count,
)
from coursewatch.exceptions import SessionCorruptedError, ExtractionFailedError


LOGIN_CHECK_PAGE = (
    "<html><head><script type='text/javascript'>\r\n"
    "Ext.onReady(function() {\r\n"
    "    var form = new Ext.form.FormPanel({\r\n"
    "        url:'LoginCheckCtrl?action=login&id=' + '8f2c1e0a9b',\r\n"
    "        method: 'POST'\r\n"
    "    });\r\n"
    "});\r\n"
    "</script></head><body></body></html>"
)

INDEX_PAGE = (
    "<script>\r\n"
    "items: [{\r\n"
    "    name: 'userid',\r\n"
    "    value: '40947030S'\r\n"
    "}, {\r\n"
    "    name: 'stdName',\r\n"
    "    xtype: 'hidden',\r\n"
    "    value: '王小明'\r\n"
    "}]\r\n"
    "</script>"
)

QUERY_RESPONSE = '{"Count":3,"List":[{"serialNo":"1234","courseName":"Calculus"}]}'


def synthetic_corrupted_page():
    return "<html><body><script>alert('%s');</script></body></html>" % CORRUPTION_MARKER


class ParserOfflineTest(unittest.TestCase):
    def test_check_response(self):
        check_response("<html>ok</html>")
        check_response("")
        with self.assertRaises(SessionCorruptedError):
            check_response(synthetic_corrupted_page())

    def test_login_success(self):
        self.assertTrue(is_login_success("{success:true, msg:''}"))
        self.assertFalse(is_login_success("{success:false, msg:'驗證碼錯誤'}"))

    def test_login_token(self):
        self.assertEqual(get_login_token(LOGIN_CHECK_PAGE), "8f2c1e0a9b")

    def test_login_token_missing(self):
        with self.assertRaises(ExtractionFailedError):
            get_login_token("<html></html>")

    def test_std_name(self):
        self.assertEqual(get_std_name(INDEX_PAGE), "王小明")

    def test_std_name_missing(self):
        with self.assertRaises(ExtractionFailedError):
            get_std_name("name: 'userid', value: 'x'")

    def test_seat_count(self):
        self.assertEqual(get_seat_count(QUERY_RESPONSE), 3)
        self.assertEqual(get_seat_count("{'Count' : 0, 'List': []}"), 0)
        self.assertEqual(get_seat_count('{"Count": 17}'), 17)

    def test_seat_count_missing(self):
        with self.assertRaises(ExtractionFailedError):
            get_seat_count('{"List":[]}')


if __name__ == "__main__":
    unittest.main()
