# setup.py
from setuptools import setup

setup(
    name='adaptive-scalar-encoder',
    version='0.1.0',
    description='Scalar-to-SDR encoder that learns its value range from the stream.',
    python_requires='>=3.10',
    # This tells setuptools that the root for the modules is the 'src' directory.
    package_dir={'': 'src'},
    # This explicitly lists all the .py files that should be made importable.
    py_modules=[
        "adaptive_scalar_encoder",
        "encoder_config",
        "encoder_params",
        "encoders",
        "errors",
        "range_tracker",
        "scalar_encoder",
        "sliding_window",
    ],
    install_requires=[
        "numpy",
        "pydantic>=2",
        "torch",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
