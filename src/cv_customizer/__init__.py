"""CV Customizer - tailor CV profile, competencies and projects to customer requirements."""

__version__ = "0.1.0"
