import pytest

from word_walk.integrations.model_manager import ModelManager


class _Logger:
    def __init__(self):
        self.infos = []
        self.debugs = []
        self.exceptions = []

    def info(self, message, *args):
        self.infos.append(message % args if args else message)

    def debug(self, message, *args):
        self.debugs.append(message % args if args else message)

    def exception(self, message, *args):
        self.exceptions.append(message % args if args else message)


class FakeModel:
    def __init__(self, repo_id):
        self.repo_id = repo_id
        self.device = None
        self.evaluated = False

    def to(self, device):
        self.device = device
        return self

    def eval(self):
        self.evaluated = True
        return self


class FakePipeline:
    def __init__(self, lang_code, repo_id):
        self.lang_code = lang_code
        self.repo_id = repo_id
        self.loaded = []

    def load_voice(self, voice):
        self.loaded.append(voice)
        return {"voice": voice}


def test_model_manager_caches_models_and_pipelines():
    manager = ModelManager(
        repo_id="repo/x",
        cuda_available=True,
        logger=_Logger(),
        model_factory=FakeModel,
        pipeline_factory=FakePipeline,
    )

    cpu_model_a = manager.get_model(False)
    cpu_model_b = manager.get_model(False)
    gpu_model = manager.get_model(True)
    assert cpu_model_a is cpu_model_b
    assert cpu_model_a.device == "cpu"
    assert gpu_model.device == "cuda"
    assert cpu_model_a.evaluated is True
    assert cpu_model_a.repo_id == "repo/x"

    pipe_a1 = manager.get_pipeline("af_heart")
    pipe_a2 = manager.get_pipeline("af_bella")
    pipe_b = manager.get_pipeline("bf_emma")
    assert pipe_a1 is pipe_a2
    assert pipe_a1.lang_code == "a"
    assert pipe_b.lang_code == "b"

    pack_1 = manager.get_voice_pack("af_heart")
    pack_2 = manager.get_voice_pack("af_heart")
    assert pack_1 is pack_2
    assert pipe_a1.loaded == ["af_heart"]


def test_model_manager_falls_back_to_cpu_without_cuda():
    manager = ModelManager(
        repo_id="repo/x",
        cuda_available=False,
        logger=_Logger(),
        model_factory=FakeModel,
        pipeline_factory=FakePipeline,
    )

    model = manager.get_model(True)

    assert model.device == "cpu"
    assert manager.get_model(False) is model


def test_model_manager_logs_and_reraises_load_failures():
    logger = _Logger()

    def broken_model(_repo_id):
        raise RuntimeError("weights missing")

    def broken_pipeline(_lang_code, _repo_id):
        raise RuntimeError("no g2p")

    manager = ModelManager(
        repo_id="repo/x",
        cuda_available=False,
        logger=logger,
        model_factory=broken_model,
        pipeline_factory=broken_pipeline,
    )

    with pytest.raises(RuntimeError):
        manager.get_model(False)
    with pytest.raises(RuntimeError):
        manager.get_voice_pack("af_heart")

    assert "Failed to load model on cpu" in logger.exceptions
    assert "Failed to initialize pipeline for language code=a" in logger.exceptions
    assert manager.models == {}
    assert manager.voice_cache == {}
