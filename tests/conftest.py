pytest_plugins = [
    "tests.fixtures.app_client",
]
