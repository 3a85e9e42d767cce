# pip install -e .[test]
from setuptools import find_packages, setup

INSTALL_REQUIRES = [
    "numpy",
]

EXTRAS_REQUIRE = {
    "test": ["pytest"],
}


def get_packages() -> list[str]:
    """
    Collect the packages to install.

    Returns
    -------
    list[str]
        The ``javastyle`` package and all of its sub-packages.
    """
    return find_packages(include=["javastyle", "javastyle.*"])


def main() -> None:
    """Main setup function"""
    packages = get_packages()

    if not packages:
        raise RuntimeError("No packages found to install")

    setup(
        name="javastyle-collection",
        version="0.1.0",
        description="Java-style collections for Python",
        packages=packages,
        python_requires=">=3.9",
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        zip_safe=False
    )


if __name__ == "__main__":
    main()
