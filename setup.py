import pathlib
import setuptools


HERE = pathlib.Path(__file__).parent

README = (HERE/'README.md').read_text()

setuptools.setup(
    name='school_console',
    version='1.0',
    description='A client for reading and updating school directory data '
                'through the school-administration console.',
    long_description=README,
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python'
    ],
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    install_requires=['requests'],
    extras_require={'test': ['responses', 'pytest']},
    python_requires=">=3.8"
)
