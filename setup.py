from setuptools import setup, find_packages
setup(
    name='hub-testkit',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'hub_testkit': [
            'config/*.yaml',
        ],
    },
    description='Dev hub authentication helpers for sfdx test harnesses.',
    author='Your Name',
    author_email='youremail@example.com',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'pydantic>=2.0.0',
        'pytest>=7.0.0',
    ],
    entry_points={
        'pytest11': [
            'hub_testkit = hub_testkit.pytest_plugin',
        ],
    },
)
