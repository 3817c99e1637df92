from setuptools import setup, find_packages

setup(
    name="image_combiner",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        'opencv-python',
        'numpy',
        'pyyaml',
        'numba',
        'fastapi',
        'python-multipart',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
    entry_points={
        'console_scripts': [
            'combine-images=image_combiner.main:cli',
        ],
    },
)
