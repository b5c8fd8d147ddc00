from setuptools import setup

setup(
    name='id-obfuscator',
    version='1.0',
    description='Reversible, keyed obfuscation of numeric IDs into fixed-length digit codes.',
    python_requires='>=3.11',
    py_modules=[
        'app',
        'bigmath',
        'config',
        'core_logic',
        'encoding',
        'limiter',
        'models',
        'obfuscation',
        'router',
    ],
    install_requires=[
        'fastapi',
        'pydantic>=2',
        'slowapi',
        'uvicorn',
    ],
    extras_require={
        'test': ['pytest', 'httpx', 'limits'],
    },
)
