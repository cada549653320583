#!/usr/bin/env python3

from setuptools import setup
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="wellenkugel",
        packages=[
            "wellenkugel",
            "wellenkugel.mesh",
            "wellenkugel.visualization",
            "wellenkugel.visualization.backends",
        ],
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Interactive viewer for the Wellenkugel parametric surface",
        author="mirmik",
        author_email="mirmikns@yandex.ru",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["parametric surface", "opengl", "normal mapping"],
        classifiers=[],
        package_data={
            "wellenkugel": [
                "visualization/shaders/*",
            ]
        },
        include_package_data=True,
        install_requires=[
            "numpy",
            "PyOpenGL>=3.1",
            "glfw>=2.5.0",
            "Pillow>=9.1",
        ],
        extras_require={
            "test": ["pytest"],
        },
        entry_points={
            "console_scripts": [
                "wellenkugel=wellenkugel.__main__:main",
            ],
        },
        zip_safe=False,
    )
