import unittest

from weather_gateway.conversions import (
    COMPASS_POINTS,
    celsius_to_fahrenheit,
    degrees_to_compass,
    hpa_to_inhg,
    kmh_to_mph,
    mm_to_inches,
)


class TestConversions(unittest.TestCase):
    def test_celsius_to_fahrenheit(self):
        self.assertEqual(celsius_to_fahrenheit(0), 32)
        self.assertEqual(celsius_to_fahrenheit(100), 212)
        self.assertEqual(celsius_to_fahrenheit(-40), -40)

    def test_kmh_to_mph(self):
        self.assertAlmostEqual(kmh_to_mph(100), 62.1371)
        self.assertEqual(kmh_to_mph(0), 0)

    def test_mm_to_inches(self):
        self.assertAlmostEqual(mm_to_inches(25.4), 1.0, places=4)

    def test_hpa_to_inhg(self):
        self.assertAlmostEqual(hpa_to_inhg(1013.25), 29.92, delta=0.01)


class TestDegreesToCompass(unittest.TestCase):
    def test_cardinal_points(self):
        self.assertEqual(degrees_to_compass(0), "N")
        self.assertEqual(degrees_to_compass(90), "E")
        self.assertEqual(degrees_to_compass(180), "S")
        self.assertEqual(degrees_to_compass(270), "W")

    def test_wraps_at_360(self):
        self.assertEqual(degrees_to_compass(360), "N")
        self.assertEqual(degrees_to_compass(355), "N")

    def test_intermediate_points(self):
        self.assertEqual(degrees_to_compass(22.5), "NNE")
        self.assertEqual(degrees_to_compass(337.5), "NNW")

    def test_halfway_rounds_up(self):
        self.assertEqual(degrees_to_compass(11.25), "NNE")
        self.assertEqual(degrees_to_compass(348.75), "N")

    def test_every_sector_center(self):
        for i, point in enumerate(COMPASS_POINTS):
            self.assertEqual(degrees_to_compass(i * 22.5), point)


if __name__ == "__main__":
    unittest.main()
