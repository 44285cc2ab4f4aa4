from glob import glob
from setuptools import setup


setup(
    name='infixrpn',
    use_scm_version={
        'fallback_version': '0.1.0',
    },
    description='Infix expression calculator, by way of RPN',
    install_requires=[
        'regex',
        'prompt_toolkit',
        'numpy',
    ],
    packages=['infixrpn'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
