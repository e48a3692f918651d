""" 
MIT License

Copyright (c) 2021 Karl M. Laundal

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.


Spherical harmonic synthesis of the geomagnetic main field.

get_legendre - Schmidt quasi-normalized associated Legendre functions and
               their derivatives with respect to colatitude
synthesize   - field components in geocentric spherical coordinates
rotate       - rotation of geocentric components to north/east/down

Legendre functions are stored in a packed triangular array, with the
function of degree n and order m at index n*(n + 1)//2 + m (see
legendre_index). The first axis of the arrays runs over this index, the
remaining axes follow the shape of the colatitude input.

"""

import numpy as np

from .models import MAX_DEGREE, coefficient_index

# Geomagnetic reference radius:
RE = 6371.2 # km


def legendre_index(n, m):
    """ Index of degree n and order m in packed Legendre function arrays """
    return n * (n + 1) // 2 + m


def get_legendre(theta, nmax = MAX_DEGREE):
    """
    Calculate Schmidt quasi-normalized associated Legendre functions

    The functions are calculated with a forward recurrence, seeded with
    P(0, 0) = 1, P(1, 1) = sin(theta), dP(0, 0) = 0, dP(1, 1) = cos(theta):

        P(n, n) = sqrt(1 - 1/(2n)) sin(theta) P(n-1, n-1)
        P(n, m) = c1 cos(theta) P(n-1, m) - c2 P(n-2, m)

    with c1 = (2n - 1)/sqrt(n**2 - m**2) and
    c2 = sqrt((n - 1)**2 - m**2)/sqrt(n**2 - m**2). The derivatives follow
    by differentiating the recurrence term by term.

    Parameters
    ----------
    theta : array
        colatitude(s) [deg]
    nmax : int, optional
        maximum degree, default 13

    Returns
    -------
    P : array
        Legendre functions, with shape ((nmax + 1)*(nmax + 2)/2, ) + theta.shape
    dP : array
        dP/dtheta, same shape as P
    """

    theta = np.asarray(theta, dtype = np.float64)
    theta_rad = np.radians(theta)
    sinth = np.sin(theta_rad)
    costh = np.cos(theta_rad)

    size = legendre_index(nmax, nmax) + 1
    P  = np.zeros((size, ) + theta.shape, dtype = np.float64)
    dP = np.zeros((size, ) + theta.shape, dtype = np.float64)

    P[0] = 1.
    if nmax == 0:
        return P, dP
    P[legendre_index(1, 1)]  = sinth
    dP[legendre_index(1, 1)] = costh

    for n in range(1, nmax + 1):
        for m in range(0, n + 1):
            k = legendre_index(n, m)

            if n == m:
                if n == 1: # seed
                    continue
                k1 = legendre_index(n - 1, n - 1)
                cof = np.sqrt(1 - 1 / (2 * n))
                P[k]  = cof * sinth * P[k1]
                dP[k] = cof * (sinth * dP[k1] + costh * P[k1])

            else:
                k1 = legendre_index(n - 1, m)
                c1 = (2 * n - 1) / np.sqrt(n**2 - m**2)
                P[k]  = c1 * costh * P[k1]
                dP[k] = c1 * (costh * dP[k1] - sinth * P[k1])

                if m <= n - 2: # P(n-2, m) is zero otherwise
                    k2 = legendre_index(n - 2, m)
                    c2 = np.sqrt((n - 1)**2 - m**2) / np.sqrt(n**2 - m**2)
                    P[k]  -= c2 * P[k2]
                    dP[k] -= c2 * dP[k2]

    return P, dP


def synthesize(coefficients, r, theta, phi):
    """
    Calculate magnetic field components in geocentric coordinates

    Broadcasting rules apply for coordinate arrays, and the combined shape
    is preserved in the output.

    Parameters
    ----------
    coefficients : array
        195 Gauss coefficients [nT] in packed order
    r : array
        radius [km]
    theta : array
        geocentric colatitude [deg]
    phi : array
        longitude [deg], positive east

    Returns
    -------
    Br : array
        Magnetic field [nT] in radial direction
    Btheta : array
        Magnetic field [nT] in theta direction (south on an
        Earth-centered sphere with radius r)
    Bphi : array
        Magnetic field [nT] in eastward direction
    """

    r, theta, phi = map(lambda x: np.asarray(x, dtype = np.float64), np.broadcast_arrays(r, theta, phi))

    P, dP = get_legendre(theta)

    theta_rad = np.radians(theta)
    sinth = np.sin(theta_rad)
    costh = np.cos(theta_rad)

    # on the poles, m P(n, m)/sin(theta) is replaced by cos(theta) P(n, m)
    pole = sinth == 0
    inv_sinth = np.divide(1., sinth, out = np.zeros_like(sinth), where = ~pole)

    # compute cosmphi and sinmphi:
    phi_rad = np.radians(phi)
    cosmphi = [np.cos(m * phi_rad) for m in range(MAX_DEGREE + 1)]
    sinmphi = [np.sin(m * phi_rad) for m in range(MAX_DEGREE + 1)]

    Br     = np.zeros_like(r)
    Btheta = np.zeros_like(r)
    Bphi   = np.zeros_like(r)

    ratio = (RE / r)**2
    for n in range(1, MAX_DEGREE + 1):
        ratio = ratio * RE / r # (RE/r)**(n + 2)

        for m in range(0, n + 1):
            k = legendre_index(n, m)
            g = coefficients[coefficient_index(n, m, 'g')]

            if m == 0:
                cof = ratio * g
                Br     += (n + 1) * cof * P[k]
                Btheta -= cof * dP[k]
                continue

            h = coefficients[coefficient_index(n, m, 'h')]
            cof = ratio * (g * cosmphi[m] + h * sinmphi[m])
            Br     += (n + 1) * cof * P[k]
            Btheta -= cof * dP[k]

            cof = ratio * (h * cosmphi[m] - g * sinmphi[m])
            Bphi   -= np.where(pole, costh * cof * P[k], m * inv_sinth * cof * P[k])

    return Br, Btheta, Bphi


def rotate(Br, Btheta, Bphi, delta):
    """
    Rotate geocentric field components to the local north/east/down frame

    Parameters
    ----------
    Br, Btheta, Bphi : array
        field components in geocentric spherical coordinates
    delta : array
        angle [deg] between the geodetic and geocentric vertical, zero if
        north/east/down should refer to the geocentric sphere

    Returns
    -------
    north, east, down : array
        field components in the local frame
    """
    delta_rad = np.radians(delta)
    cos_delta = np.cos(delta_rad)
    sin_delta = np.sin(delta_rad)

    north = -Btheta * cos_delta - Br * sin_delta
    east  = Bphi
    down  =  Btheta * sin_delta - Br * cos_delta

    return np.broadcast_arrays(north, east, down)
