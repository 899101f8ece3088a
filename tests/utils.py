import io
import json
import os


SAMPLES = os.path.join(os.path.dirname(__file__), "samples")


def load_sample_data(filename):
    with open(os.path.join(SAMPLES, filename)) as f:
        return json.load(f)


def sample_stream(filename):
    with open(os.path.join(SAMPLES, filename), "rb") as f:
        return io.BytesIO(f.read())
