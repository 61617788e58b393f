import unittest

from weather_gateway.main import app


class TestMain(unittest.TestCase):
    def test_app_metadata(self):
        self.assertEqual(app.title, "Weather Gateway")

    def test_routes_registered(self):
        paths = set(app.openapi()["paths"])
        for path in ("/", "/data", "/temperature", "/windspeed", "/windgusts",
                     "/rainfall", "/humidity", "/pressure", "/uv"):
            self.assertIn(path, paths)


if __name__ == "__main__":
    unittest.main()
