# touchcam/utils/math.py

import numpy as np

# Quaternions are [x, y, z, w]. World up is +Y.
# Euler angles are degrees, applied yaw (Y), then pitch (X), then roll (Z):
# R = Ry(yaw) @ Rx(pitch) @ Rz(roll)

WORLD_UP = np.array([0.0, 1.0, 0.0], dtype=np.float32)
IDENTITY_QUATERNION = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float32)


def quaternion_from_axis_angle(axis: np.ndarray, degrees: float) -> np.ndarray:
    """Rotation of `degrees` about `axis` (normalized here)."""
    axis = np.asarray(axis, dtype=np.float64)
    length = np.linalg.norm(axis)
    if length == 0.0:
        return IDENTITY_QUATERNION.copy()

    half = np.radians(degrees) * 0.5
    xyz = axis / length * np.sin(half)
    return np.array([xyz[0], xyz[1], xyz[2], np.cos(half)], dtype=np.float32)


def quaternion_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product q1 * q2 (q2 applied first)."""
    x1, y1, z1, w1 = q1[0], q1[1], q1[2], q1[3]
    x2, y2, z2, w2 = q2[0], q2[1], q2[2], q2[3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    return np.array([x, y, z, w], dtype=np.float32)


def quaternion_normalize(q: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(q)
    if length == 0.0:
        return IDENTITY_QUATERNION.copy()
    return (q / length).astype(np.float32)


def quaternion_from_euler(pitch: float, yaw: float, roll: float) -> np.ndarray:
    """Compose yaw, pitch, roll (degrees) into one quaternion."""
    q_yaw = quaternion_from_axis_angle(np.array([0.0, 1.0, 0.0]), yaw)
    q_pitch = quaternion_from_axis_angle(np.array([1.0, 0.0, 0.0]), pitch)
    q_roll = quaternion_from_axis_angle(np.array([0.0, 0.0, 1.0]), roll)
    return quaternion_normalize(quaternion_multiply(quaternion_multiply(q_yaw, q_pitch), q_roll))


def quaternion_to_matrix3(quat: np.ndarray) -> np.ndarray:
    """Convert quaternion to 3x3 rotation matrix (column vectors)."""
    x, y, z, w = [float(c) for c in quat]

    return np.array([
        [1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)],
        [2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)],
        [2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)],
    ], dtype=np.float64)


def quaternion_to_euler(quat: np.ndarray) -> np.ndarray:
    """
    Decompose a quaternion into [pitch, yaw, roll] degrees.
    Pitch is in [-90, 90]; yaw and roll in (-180, 180].
    """
    q = np.asarray(quat, dtype=np.float64)
    m = quaternion_to_matrix3(q / np.linalg.norm(q))

    sin_pitch = np.clip(-m[1, 2], -1.0, 1.0)
    pitch = np.arcsin(sin_pitch)

    if abs(sin_pitch) > 0.99999:
        # Gimbal lock: fold roll into yaw
        yaw = np.arctan2(-m[2, 0], m[0, 0])
        roll = 0.0
    else:
        yaw = np.arctan2(m[0, 2], m[2, 2])
        roll = np.arctan2(m[1, 0], m[1, 1])

    return np.degrees(np.array([pitch, yaw, roll], dtype=np.float64))


def quaternion_slerp(q1: np.ndarray, q2: np.ndarray, t: float) -> np.ndarray:
    """
    Spherical linear interpolation between two quaternions.
    """
    q1 = np.asarray(q1, dtype=np.float64)
    q2 = np.asarray(q2, dtype=np.float64)
    dot = np.dot(q1, q2)

    # Take the short way round
    if dot < 0.0:
        q2 = -q2
        dot = -dot

    dot = np.clip(dot, -1.0, 1.0)

    # Nearly parallel: fall back to normalized lerp
    if dot > 0.9995:
        return quaternion_normalize(q1 + t * (q2 - q1))

    theta = np.arccos(dot)
    sin_theta = np.sin(theta)

    w1 = np.sin((1.0 - t) * theta) / sin_theta
    w2 = np.sin(t * theta) / sin_theta

    return quaternion_normalize(w1 * q1 + w2 * q2)


def quaternion_nlerp(q1: np.ndarray, q2: np.ndarray, t: float) -> np.ndarray:
    """Normalized linear interpolation (cheaper than slerp, not constant speed)."""
    q1 = np.asarray(q1, dtype=np.float64)
    q2 = np.asarray(q2, dtype=np.float64)
    if np.dot(q1, q2) < 0.0:
        q2 = -q2
    return quaternion_normalize(q1 + t * (q2 - q1))


def quaternion_angle(q1: np.ndarray, q2: np.ndarray) -> float:
    """Angle in degrees between two orientations."""
    q1 = np.asarray(q1, dtype=np.float64)
    q2 = np.asarray(q2, dtype=np.float64)
    dot = abs(float(np.dot(q1 / np.linalg.norm(q1), q2 / np.linalg.norm(q2))))
    return float(np.degrees(2.0 * np.arccos(min(1.0, dot))))


def wrap_360(angle: float) -> float:
    """Wrap to [0, 360)."""
    wrapped = angle % 360.0
    return 0.0 if wrapped == 360.0 else wrapped


def wrap_180(angle: float) -> float:
    """Wrap to (-180, 180]."""
    wrapped = wrap_360(angle)
    return wrapped - 360.0 if wrapped > 180.0 else wrapped


def lerp(a, b, t: float):
    """Linear interpolation (scalars or arrays)."""
    return a + t * (b - a)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between min and max."""
    return max(min_val, min(max_val, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance; 0.0 for coincident points."""
    diff = np.asarray(b, dtype=np.float64) - np.asarray(a, dtype=np.float64)
    length = float(np.linalg.norm(diff))
    return length if np.isfinite(length) else 0.0
