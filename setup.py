from setuptools import setup, find_packages

setup(
   name="es-unique-key",
   version="0.1",
   description="Track unique keys in Elasticsearch",
   package_dir={"": "src"},
   packages=find_packages(where="src"),
   include_package_data=True,
   python_requires=">=3.8",
   install_requires=[
      "elasticsearch>=8,<10",
      "pydantic>=2",
   ],
   extras_require={
      "test": ["pytest"],
   },
)
