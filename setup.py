import setuptools

setuptools.setup(
    name="svwb_win_tracker",
    version="0.2",
    description="Shadowverse: Worlds Beyond win tracker: game logging, Take Two runs and per-view stats",
    packages=["services", "repositories", "utils"],
    py_modules=[],
    data_files=[("locales", ["locales/en.json", "locales/ja.json"])],
    classifiers=["Programming Language :: Python :: 3"],
    python_requires=">=3.11",
    install_requires=[
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
