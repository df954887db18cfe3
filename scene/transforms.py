"""Rotation helpers. Quaternions are numpy arrays ordered (x, y, z, w); Euler angles use XYZ order."""

import math

import numpy as np

UP = np.array([0.0, 1.0, 0.0])


def identity_quat():
    return np.array([0.0, 0.0, 0.0, 1.0])


def normalize(v):
    n = np.linalg.norm(v)
    if n < 1e-12:
        return v
    return v / n


def quat_to_matrix(q):
    x, y, z, w = q
    x2, y2, z2 = x + x, y + y, z + z
    xx, xy, xz = x * x2, x * y2, x * z2
    yy, yz, zz = y * y2, y * z2, z * z2
    wx, wy, wz = w * x2, w * y2, w * z2
    return np.array([
        [1 - (yy + zz), xy - wz, xz + wy],
        [xy + wz, 1 - (xx + zz), yz - wx],
        [xz - wy, yz + wx, 1 - (xx + yy)],
    ])


def quat_from_matrix(m):
    """Rotation matrix (pure, unscaled) → unit quaternion."""
    m11, m12, m13 = m[0]
    m21, m22, m23 = m[1]
    m31, m32, m33 = m[2]
    trace = m11 + m22 + m33

    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        q = (
            (m32 - m23) * s,
            (m13 - m31) * s,
            (m21 - m12) * s,
            0.25 / s,
        )
    elif m11 > m22 and m11 > m33:
        s = 2.0 * math.sqrt(1.0 + m11 - m22 - m33)
        q = (0.25 * s, (m12 + m21) / s, (m13 + m31) / s, (m32 - m23) / s)
    elif m22 > m33:
        s = 2.0 * math.sqrt(1.0 + m22 - m11 - m33)
        q = ((m12 + m21) / s, 0.25 * s, (m23 + m32) / s, (m13 - m31) / s)
    else:
        s = 2.0 * math.sqrt(1.0 + m33 - m11 - m22)
        q = ((m13 + m31) / s, (m23 + m32) / s, 0.25 * s, (m21 - m12) / s)
    return normalize(np.array(q, dtype=np.float64))


def look_at_quat(position, target, up=UP):
    """
    Orientation whose local +Z axis points from position to target.

    Degenerate cases (target on top of position, or straight above/below)
    are nudged instead of producing NaNs.
    """
    z = np.asarray(target, dtype=np.float64) - np.asarray(position, dtype=np.float64)
    if np.dot(z, z) < 1e-18:
        z = np.array([0.0, 0.0, 1.0])
    z = normalize(z)

    x = np.cross(up, z)
    if np.dot(x, x) < 1e-18:
        # up and z are parallel
        z = z.copy()
        if abs(up[2]) == 1.0:
            z[0] += 1e-4
        else:
            z[2] += 1e-4
        z = normalize(z)
        x = np.cross(up, z)
    x = normalize(x)
    y = np.cross(z, x)

    return quat_from_matrix(np.column_stack((x, y, z)))


def slerp(qa, qb, t):
    """Spherical interpolation along the short arc; t is clamped to [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    if t == 0.0:
        return np.array(qa, dtype=np.float64)
    if t == 1.0:
        return np.array(qb, dtype=np.float64)

    qa = np.asarray(qa, dtype=np.float64)
    qb = np.asarray(qb, dtype=np.float64)
    cos_half = float(np.dot(qa, qb))
    if cos_half < 0.0:
        qb = -qb
        cos_half = -cos_half
    if cos_half >= 1.0:
        return qa.copy()

    sqr_sin = 1.0 - cos_half * cos_half
    if sqr_sin <= np.finfo(float).eps:
        return normalize(qa * (1.0 - t) + qb * t)

    sin_half = math.sqrt(sqr_sin)
    half = math.atan2(sin_half, cos_half)
    ra = math.sin((1.0 - t) * half) / sin_half
    rb = math.sin(t * half) / sin_half
    return qa * ra + qb * rb


def euler_from_quat(q):
    """Quaternion → (x, y, z) Euler angles, XYZ order."""
    m = quat_to_matrix(q)
    m11, m12, m13 = m[0]
    m22, m23 = m[1][1], m[1][2]
    m32, m33 = m[2][1], m[2][2]

    y = math.asin(min(max(m13, -1.0), 1.0))
    if abs(m13) < 0.9999999:
        x = math.atan2(-m23, m33)
        z = math.atan2(-m12, m11)
    else:
        x = math.atan2(m32, m22)
        z = 0.0
    return np.array([x, y, z])


def quat_from_euler(e):
    """(x, y, z) Euler angles, XYZ order → quaternion."""
    hx, hy, hz = e[0] / 2.0, e[1] / 2.0, e[2] / 2.0
    c1, c2, c3 = math.cos(hx), math.cos(hy), math.cos(hz)
    s1, s2, s3 = math.sin(hx), math.sin(hy), math.sin(hz)
    return np.array([
        s1 * c2 * c3 + c1 * s2 * s3,
        c1 * s2 * c3 - s1 * c2 * s3,
        c1 * c2 * s3 + s1 * s2 * c3,
        c1 * c2 * c3 - s1 * s2 * s3,
    ])


def rotate(q, v):
    """Rotate vector(s) v by q. v may be (3,) or (N, 3)."""
    return np.asarray(v) @ quat_to_matrix(q).T
