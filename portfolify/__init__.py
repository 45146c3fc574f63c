"""Portfolify -- generate ready-to-run portfolio website projects.

Quick usage::

    from portfolify.prompts import defaults_for
    from portfolify.scaffolder import ProjectGenerator

    configuration = defaults_for("designer")
    generator = ProjectGenerator()
    tree = await generator.generate("my-portfolio", configuration, "./my-portfolio")
"""

__version__ = "1.0.0"
