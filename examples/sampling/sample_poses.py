import os

import numpy as np

from posesampler.Random import RandomEngine
from posesampler.Sampler.BoxSampler import BoxSampler
from posesampler.Sampler.PlanarSampler import PlanarAnnulusSampler, PlanarBoxSampler
from posesampler.Sampler.SpatialSampler import (
    SpatialBallEulerSampler,
    SpatialBallQuatSampler,
    SpatialBoxEulerSampler,
    SpatialBoxQuatSampler,
)
from posesampler.Utils import PltUtils
from posesampler.Utils.LoggerUtils import get_logger

logger = get_logger(__name__)

# --- 常量定义 ---
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
SAVE_DIR = os.path.join(PROJECT_ROOT, "figures")
SEED = 42
NUM_SAMPLES = 2000


def build_samplers():
    """按固定种子构造所有采样器。"""
    return {
        "box3": BoxSampler([0, 0, 0], [1, 1, 1]),
        "se2_box": PlanarBoxSampler.from_limits(-1.0, 1.0, -0.5, 0.5),
        "se2_annulus": PlanarAnnulusSampler(0.5, 0.5, 0.2, 1.0, 0.0, 0.0),
        "se3_box_euler": SpatialBoxEulerSampler([-1, -1, 0], [1, 1, 1]),
        "se3_box_quat": SpatialBoxQuatSampler([-1, -1, 0], [1, 1, 1]),
        "se3_ball_euler": SpatialBallEulerSampler(0.8),
        "se3_ball_quat": SpatialBallQuatSampler(0.8),
    }


def main():
    RandomEngine.set_seed(SEED)
    logger.info(f"种子: {RandomEngine.get_seed()}")

    samplers = build_samplers()
    samples = {}
    for name, sampler in samplers.items():
        samples[name] = sampler.sample_many(NUM_SAMPLES)
        logger.info(f"{name}: first sample {np.round(samples[name][0], 4)}")

    if not os.path.exists(SAVE_DIR):
        os.makedirs(SAVE_DIR)
        logger.info(f"创建保存目录: {SAVE_DIR}")

    # 平面位姿散点图
    for name in ("se2_box", "se2_annulus"):
        fig = PltUtils.plot_planar_samples(samples[name], title=name)
        fig.savefig(os.path.join(SAVE_DIR, f"{name}.png"))
        PltUtils.close(fig)

    # 径向直方图, 均匀分布时应为平的
    annulus_bound = samplers["se2_annulus"].get_bound()
    fig = PltUtils.plot_radial_histogram(
        samples["se2_annulus"][:, :2] - annulus_bound.offset,
        annulus_bound.r_min,
        annulus_bound.r_max,
    )
    fig.savefig(os.path.join(SAVE_DIR, "se2_annulus_radial.png"))
    PltUtils.close(fig)

    radius = samplers["se3_ball_quat"].get_bound()
    fig = PltUtils.plot_radial_histogram(samples["se3_ball_quat"][:, :3], 0.0, radius)
    fig.savefig(os.path.join(SAVE_DIR, "se3_ball_radial.png"))
    PltUtils.close(fig)

    quat_norms = np.linalg.norm(samples["se3_box_quat"][:, 3:], axis=1)
    logger.info(f"四元数模长偏差最大值: {np.max(np.abs(quat_norms - 1.0)):.3e}")
    logger.info(f"图像保存至: {SAVE_DIR}")


if __name__ == "__main__":
    main()
